class JiraReportsError(Exception):
    """Base exception for report generation errors."""

    pass


class SourceError(JiraReportsError):
    """Exception raised when a call to the Jira API fails."""

    def __init__(self, message, status_code=None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NoBoardFound(JiraReportsError):
    """Exception raised when a project has no agile board.

    Callers building multi-project reports skip the project and continue.
    """

    def __init__(self, project_key):
        self.project_key = project_key
        super().__init__(f"No board found for project {project_key}")


class LookBackOutOfRange(JiraReportsError):
    """Exception raised when the look-back exceeds the available sprint history."""

    def __init__(self, look_back, available, project_key=None):
        self.look_back = look_back
        self.available = available
        self.project_key = project_key
        where = f" for project {project_key}" if project_key else ""
        super().__init__(
            f"Look-back of {look_back} sprint(s) requested{where}, "
            f"but only {available} sprint(s) are available"
        )


class ConfigurationError(JiraReportsError):
    """Exception raised for missing credentials or invalid options."""

    pass
