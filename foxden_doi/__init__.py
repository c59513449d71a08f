"""FOXDEN DOI - publish datasets to DOI providers and sync the MetaData service."""

from foxden_doi.__version__ import __version__, __description__, __license__

__all__ = ['__version__', '__description__', '__license__']
