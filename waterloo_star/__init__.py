"""Waterloo Star: housing request and sublet forum backend.

The HTTP application lives in ``waterloo_star.main``; import it explicitly so
that using the models or repositories does not build an app.
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
