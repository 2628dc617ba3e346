from .config import ReviewFormsConfig
from .generator import generate_forms
from .importer import import_scores

__all__ = ["ReviewFormsConfig", "generate_forms", "import_scores"]
