from .image_import_service import ImageImportService

__all__ = ["ImageImportService"]
