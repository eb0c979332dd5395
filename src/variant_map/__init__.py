"""Variant Map: crowdsourced retail locations and the product variants they carry."""

__version__ = "0.1.0"
