"""Version information for FOXDEN DOI."""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Release information
__author__ = "FOXDEN developers"
__organization__ = "Cornell High Energy Synchrotron Source (CHESS)"
__license__ = "MIT"
__url__ = "https://github.com/CHESSComputing/FOXDEN"
__description__ = "FOXDEN DOI publication and MetaData synchronization"
