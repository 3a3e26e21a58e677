"""deptui - interactive viewer for Python dependency trees."""

__version__ = "0.1.0"
