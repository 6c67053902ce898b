"""Result envelope returned by the service layer."""
from enum import Enum
from typing import Any, Iterable, List

from pydantic import BaseModel, Field


class WebServiceMessageType(str, Enum):
    INFO = "I"
    SUCCESS = "S"
    ERROR = "E"
    WARNING = "W"


class WebServiceMessage(BaseModel):
    """A message addressed to the user of the front end."""
    type: WebServiceMessageType
    text: str


class WebServiceResult(BaseModel):
    """Result data together with the messages collected while producing it.

    Messages keep the order in which they were added.
    """
    messages: List[WebServiceMessage] = Field(default_factory=list)
    data: Any = None

    def add_message(self, message: WebServiceMessage) -> None:
        self.messages.append(message)

    def add_messages(self, messages: Iterable[WebServiceMessage]) -> None:
        self.messages.extend(messages)

    def has_errors(self) -> bool:
        return any(message.type == WebServiceMessageType.ERROR for message in self.messages)
