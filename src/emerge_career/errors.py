"""Exception types shared by storage, content adapters and the API layer."""


class EmergeError(Exception):
    """Base class for application errors."""


class NotFoundError(EmergeError):
    """A referenced record does not exist."""


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class GoalNotFoundError(NotFoundError):
    def __init__(self, goal_id: int):
        super().__init__(f"Goal {goal_id} not found")
        self.goal_id = goal_id


class DuplicateUsernameError(EmergeError):
    def __init__(self, username: str):
        super().__init__(f"Username '{username}' is already taken")
        self.username = username


class StorageError(EmergeError):
    """The persistence backend failed."""


class UpstreamError(EmergeError):
    """An external content service failed or is not configured.

    Raised by the adapters in ``emerge_career.clients``; the suggestion
    pipeline is the only caller that catches it.
    """
