"""Conversion stages. Importing a module registers its stage."""
