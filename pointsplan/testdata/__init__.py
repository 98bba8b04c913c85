from .populate import PopulateSummary, clear_all_data, populate_with_test_data

__all__ = ["PopulateSummary", "clear_all_data", "populate_with_test_data"]
