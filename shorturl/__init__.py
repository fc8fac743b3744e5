"""URL shortener service: sequential numeric short codes backed by a database."""

__version__ = "1.0.0"
