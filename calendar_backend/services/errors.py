"""Errors raised by the service layer and mapped to HTTP statuses by the routes."""


class RuleViolation(ValueError):
    """A write was rejected by a model rule. Carries one message per broken rule."""

    def __init__(self, messages: list[str] | str):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))
