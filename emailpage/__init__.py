"""Email Page: turn JSON requests into HTML pages and email links to them."""

__version__ = "0.4.0"
