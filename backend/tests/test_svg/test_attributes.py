"""Tests for the attribute extraction grammar."""

from svgsketch.svg.attributes import Attributes, parse_attributes, parse_style, split_tag_name


def test_split_tag_name_drops_namespace():
    assert split_tag_name("svg:Path d='M0 0'") == ("path", " d='M0 0'")
    assert split_tag_name("rect/") == ("rect", "/")


def test_parse_attributes_quotes_and_bare_values():
    attrs = parse_attributes(''' d="M0 0 L1 1" id='a' width=10 hidden ''')
    assert attrs == {"d": "M0 0 L1 1", "id": "a", "width": "10", "hidden": ""}


def test_parse_attributes_keys_are_lowercase():
    attrs = parse_attributes('startOffset="5" xlink:href="#p"')
    assert attrs["startoffset"] == "5"
    assert attrs["xlink:href"] == "#p"


def test_gt_inside_quoted_value():
    attrs = parse_attributes('data-x="a>b" id="z"')
    assert attrs["data-x"] == "a>b"
    assert attrs["id"] == "z"


def test_parse_style():
    assert parse_style("stroke: red; font-size:12px;;bogus") == {
        "stroke": "red",
        "font-size": "12px",
    }


def test_presentation_prefers_style():
    attrs = Attributes.from_text('font-size="10" style="font-size: 14"')
    assert attrs.presentation("font-size") == "14"
    assert attrs.number("font-size") == 10.0


def test_href_falls_back_to_xlink():
    assert Attributes.from_text('xlink:href="#a"').href() == "#a"
    assert Attributes.from_text('href="#b" xlink:href="#a"').href() == "#b"


def test_is_dashed():
    assert Attributes.from_text('stroke-dasharray="4 2"').is_dashed
    assert Attributes.from_text('style="stroke-dasharray: 1,1"').is_dashed
    assert not Attributes.from_text('stroke-dasharray="none"').is_dashed
    assert not Attributes.from_text('stroke-dasharray=""').is_dashed
    assert not Attributes.from_text('stroke="red"').is_dashed
