from .advisor import advise_compose_file, load_compose, suggest_improvements

__all__ = ["advise_compose_file", "load_compose", "suggest_improvements"]
