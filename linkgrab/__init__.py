"""linkgrab — fetch a single web page and summarise its metadata."""

__version__ = "0.1.0"
