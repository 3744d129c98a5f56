from typing import List, Optional


class CommitMessageParseError(Exception):
    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        column_number: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.column_number = column_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return (
            f"{self.message} (line {self.line_number}, "
            f"column {self.column_number})"
        )


class HeaderParseError(CommitMessageParseError):
    pass


class InvalidIdentifierError(ValueError):
    pass


class ValidationError(Exception):
    def __init__(self, errors: List[str]) -> None:
        self.errors = errors

    def __str__(self) -> str:
        new_line = '\n'
        return (
            f"The changelog settings are invalid:{new_line}{new_line}"
            f"{new_line.join(self.errors)}"
        )


class GitError(Exception):
    def __init__(self, command: List[str], stderr: str) -> None:
        super().__init__(f"git command failed: {' '.join(command)}")
        self.command = command
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}\n{self.stderr.strip()}"
        return message
