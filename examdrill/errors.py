class ExamDrillError(Exception):
    """Base class for errors raised by the review engine"""


class NotFoundError(ExamDrillError):
    """A referenced record does not exist (or is not visible to the caller)"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class SessionFinishedError(ExamDrillError):
    """Answers cannot be recorded into a session that has already ended"""

    def __init__(self, session_id: int):
        self.session_id = session_id
        super().__init__(f"Study session {session_id} is already finished")
