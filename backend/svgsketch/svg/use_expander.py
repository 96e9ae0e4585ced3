"""``<use>`` expansion — append concrete clones of referenced elements.

Resolution order for ``href="#key"``:

1. symbol group: every element whose ``parent_symbol_id == key``
2. single element whose ``id == key``
3. neither: logged and dropped

Each clone gets ``use_transform ∘ base_transform`` and is tagged with the
reference key so the pattern analyzer can group instances. References
that land on another ``<use>`` are followed, up to ``MAX_USE_DEPTH``.
"""

from __future__ import annotations

import logging

from svgsketch.models.elements import Element, UseElement
from svgsketch.svg.transform import Matrix2x3, compose

logger = logging.getLogger(__name__)

# Nested <use> chains deeper than this are treated as cycles
MAX_USE_DEPTH = 8


def normalize_href(href: str) -> str:
    href = href.strip()
    if href.startswith("#"):
        href = href[1:]
    return href


def _resolve(key: str, elements: list[Element]) -> list[Element]:
    symbol_members = [el for el in elements if el.parent_symbol_id and el.parent_symbol_id == key]
    if symbol_members:
        return symbol_members
    for el in elements:
        if el.id and el.id == key:
            return [el]
    return []


def _instantiate(
    use_transform: Matrix2x3,
    key: str,
    group_key: str,
    use_index: int,
    elements: list[Element],
    depth: int,
) -> list[Element]:
    bases = _resolve(key, elements)
    if not bases:
        logger.warning("<use> reference '#%s' not found; skipping", key)
        return []

    clones: list[Element] = []
    for base in bases:
        transform = compose(use_transform, base.transform)
        if isinstance(base, UseElement):
            nested_key = normalize_href(base.href)
            if not nested_key:
                continue
            if depth >= MAX_USE_DEPTH:
                logger.warning("<use> chain through '#%s' too deep (cycle?); skipping", nested_key)
                continue
            clones.extend(_instantiate(transform, nested_key, group_key, use_index, elements, depth + 1))
            continue
        clones.append(base.clone_for_use(transform, group_key, use_index))
    return clones


def expand(elements: list[Element]) -> list[Element]:
    """Return ``elements`` followed by the clones produced by every visible ``<use>``.

    Lookups only consider the original elements, never earlier clones.
    """
    result = list(elements)
    use_index = 0
    for el in elements:
        if not isinstance(el, UseElement) or el.is_hidden:
            continue
        key = normalize_href(el.href)
        if not key:
            logger.debug("Skipping <use> with empty href")
            continue

        clones = _instantiate(el.transform, key, key, use_index, elements, depth=0)
        if clones:
            logger.debug("Expanded <use> of '#%s' into %d element(s)", key, len(clones))
        result.extend(clones)
        use_index += 1

    logger.info("Use expansion: %d elements → %d", len(elements), len(result))
    return result
