from quickgen.config.project import ProjectConfig

__all__ = ["ProjectConfig"]
