from .extract_functions import extract_functions

__all__ = ["extract_functions"]
