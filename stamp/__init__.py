"""Building blocks for a project and file scaffolding tool."""

__version__ = "0.1.0"