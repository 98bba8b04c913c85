from .sizes import (
    DEFAULT_SIZE_MAPPING,
    JIRA_CONFIG_NAME,
    EstimateProvider,
    SizePointsMapping,
    declared_labels,
    get_size_mapping,
    lookup,
    size_cost,
)

__all__ = [
    "DEFAULT_SIZE_MAPPING",
    "JIRA_CONFIG_NAME",
    "EstimateProvider",
    "SizePointsMapping",
    "declared_labels",
    "get_size_mapping",
    "lookup",
    "size_cost",
]
