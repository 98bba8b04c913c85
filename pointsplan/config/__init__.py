from .settings import AppSettings, JiraSettings, PlanningSettings

__all__ = ["AppSettings", "JiraSettings", "PlanningSettings"]
