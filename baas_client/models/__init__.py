from .file import File, FileList

__all__ = ["File", "FileList"]
