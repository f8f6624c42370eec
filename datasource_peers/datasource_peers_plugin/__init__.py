from .plugin import ControlNodeDatasourcePlugin, ReportFileDatasourcePlugin

__all__ = ["ControlNodeDatasourcePlugin", "ReportFileDatasourcePlugin"]
