from .advocates import Advocate
