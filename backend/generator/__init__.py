"""Generator module - AI roadmap generation for an arbitrary topic."""

from .index import generate_roadmap, parse_generated_roadmap

__all__ = ["generate_roadmap", "parse_generated_roadmap"]
