from dataclasses import dataclass

from src.rules.models import Rules


@dataclass(frozen=True)
class ViewerFlags:
    """Permission flags that shape the session list for one viewer."""

    viewattendees: bool
    editsessions: bool


class PolicyEngine:
    def __init__(self, rules: Rules):
        self.rules = rules

    def check_capability(self, role: str, capability: str) -> bool:
        """
        Check whether `role` holds `capability` (viewattendees, editsessions).
        Unknown capabilities are never granted.
        """
        return self.rules.capabilities.grants(capability, role)

    def viewer_flags(self, role: str) -> ViewerFlags:
        return ViewerFlags(
            viewattendees=self.check_capability(role, "viewattendees"),
            editsessions=self.check_capability(role, "editsessions"),
        )
