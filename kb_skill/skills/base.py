"""
Skill Interface
===============

Abstract base class for skills driven by a host runtime. A skill exposes
a ``meta`` descriptor, ``validate(params)`` and ``execute(params, context)``.
``execute`` never raises for bad input: failures come back as a response
with ``metadata.success == False`` and an error code.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from kb_skill.errors import ErrorCode, SkillError

logger = logging.getLogger(__name__)


def success(result: str, **metadata: Any) -> Dict:
    """Build a successful response envelope."""
    return {"result": result, "metadata": {"success": True, **metadata}}


def failure(error: SkillError) -> Dict:
    """Build a failed response envelope from a SkillError."""
    return {
        "result": f"Error: {error.message}",
        "metadata": {"success": False, "error": error.code.value, **error.details},
    }


class Skill(ABC):
    """
    Base class for action-dispatching skills.

    Subclasses list their ``actions`` and implement ``check_params`` and
    ``dispatch``. Action validation, error conversion and logging live here.
    """

    name: str = ""
    version: str = "1.0.0"
    description: str = ""
    actions: List[str] = []

    @property
    def meta(self) -> Dict:
        """Descriptor the host runtime uses to register the skill."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "actions": list(self.actions),
        }

    def check_action(self, params: Optional[Dict]) -> str:
        """Return the requested action or raise INVALID_ACTION. Names are case-sensitive."""
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise SkillError(
                ErrorCode.INVALID_ACTION,
                f"Request parameters must be an object, got {type(params).__name__}.",
            )
        action = params.get("action")
        if not isinstance(action, str) or action not in self.actions:
            raise SkillError(
                ErrorCode.INVALID_ACTION,
                f'Invalid action "{action}". Must be one of: {", ".join(self.actions)}',
            )
        return action

    @abstractmethod
    def check_params(self, action: str, params: Dict) -> None:
        """Raise SkillError if ``params`` are not acceptable for ``action``."""
        ...

    @abstractmethod
    def dispatch(self, action: str, params: Dict, context: Optional[Dict]) -> Dict:
        """Run a validated action and return its response envelope."""
        ...

    def validate(self, params: Optional[Dict]) -> Dict:
        """
        Check ``params`` without executing anything.

        Returns
        -------
        dict
            ``{"valid": True}`` or ``{"valid": False, "error": str, "code": str}``.
        """
        try:
            action = self.check_action(params)
            self.check_params(action, params)
        except SkillError as e:
            return {"valid": False, "error": e.message, "code": e.code.value}
        return {"valid": True}

    def execute(self, params: Optional[Dict], context: Optional[Dict] = None) -> Dict:
        """Validate and run one request. Only SkillError is turned into a failure response."""
        params = params or {}
        try:
            action = self.check_action(params)
            self.check_params(action, params)
            return self.dispatch(action, params, context)
        except SkillError as e:
            logger.info("%s request rejected: %s", self.name, e.code.value)
            return failure(e)
