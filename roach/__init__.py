"""roach - Route Origin Authorization Checker, powered by IRRexplorer."""

__version__ = "1.2.0"
