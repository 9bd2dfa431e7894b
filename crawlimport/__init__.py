"""Import crawled news-article CSV files into Postgres."""

__version__ = "0.1.0"
