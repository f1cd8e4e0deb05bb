"""Skills -- host-facing handlers built on the knowledge module."""

from .base import Skill, success, failure
from .knowledge_base import KnowledgeBaseSkill, meta, validate, execute
