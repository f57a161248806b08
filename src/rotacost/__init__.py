"""rotacost: rotation roster costing and calendar status."""

__version__ = "0.1.0"
