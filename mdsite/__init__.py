"""mdsite — render a directory of markdown notes as a static HTML site."""

__version__ = "0.1.0"
