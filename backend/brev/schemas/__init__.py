from .link import LinkCreate, LinkResponse, ExportResponse, HealthResponse

__all__ = ["LinkCreate", "LinkResponse", "ExportResponse", "HealthResponse"]
