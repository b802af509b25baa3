"""lichan - download lichess games and annotate them with engine lines."""

__version__ = "0.1.0"
