"""Centralized exit codes for the hazardous CLI."""


class ExitCodes:
    """Standard exit codes for hazardous CLI commands."""

    SUCCESS = 0

    HAZARDS_FOUND = 1

    TASK_INCOMPLETE = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - No hazardous commands found",
            cls.HAZARDS_FOUND: "Hazardous command invocations detected",
            cls.TASK_INCOMPLETE: "Scan could not be completed (no scannable files)",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
