"""Load and validate biblio-json packages of Bibles, dictionaries and cross references."""

__version__ = "0.1.0"