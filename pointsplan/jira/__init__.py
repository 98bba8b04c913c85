from .client import JiraGateway, check_connection, configuration_problem
from .collector import collect_export_data, parse_scope
from .csv_export import export_to_csv
from .export_log import ExportLog, ExportLogEntry
from .exporter import JiraExporter, build_confirmation_message, build_results_message

__all__ = [
    "ExportLog",
    "ExportLogEntry",
    "JiraExporter",
    "JiraGateway",
    "build_confirmation_message",
    "build_results_message",
    "check_connection",
    "collect_export_data",
    "configuration_problem",
    "export_to_csv",
    "parse_scope",
]
