"""Model package exports."""

from models.compliance import CoherenceResult, DetectedItem, ValidationResult
from models.outfit_spec import EnforcedSpecification, ExtractionResult, GarmentSpec, MandatorySpecs
from models.taxonomy import TAXONOMY, Category, Taxonomy

__all__ = [
    "Category",
    "CoherenceResult",
    "DetectedItem",
    "EnforcedSpecification",
    "ExtractionResult",
    "GarmentSpec",
    "MandatorySpecs",
    "TAXONOMY",
    "Taxonomy",
    "ValidationResult",
]
