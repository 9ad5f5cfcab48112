"""Message and prompt models sent to the chat model."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from rag_advisors.exceptions import ConfigurationError


class UserMessage(BaseModel):
    """A message authored by the end user."""

    role: Literal["user"] = "user"
    text: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class AssistantMessage(BaseModel):
    """A message produced by the model."""

    role: Literal["assistant"] = "assistant"
    text: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class SystemMessage(BaseModel):
    """An instruction message that frames the conversation."""

    role: Literal["system"] = "system"
    text: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


Message: TypeAlias = Annotated[
    UserMessage | AssistantMessage | SystemMessage,
    Field(discriminator="role"),
]


def copy_message(message: Message) -> Message:
    """Return an independent copy of a message, metadata included."""
    match message:
        case UserMessage() | AssistantMessage() | SystemMessage():
            return message.model_copy(update={"metadata": dict(message.metadata)})
    msg = f"Unsupported message type: {type(message).__name__}"
    raise TypeError(msg)


class ChatOptions(BaseModel):
    """Optional model parameters carried alongside the messages."""

    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0)
    max_tokens: int | None = Field(default=None, gt=0)
    stop_sequences: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Prompt(BaseModel):
    """An ordered list of messages plus the options for one model call."""

    messages: list[Message] = Field(default_factory=list)
    options: ChatOptions = Field(default_factory=ChatOptions)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(
        cls,
        content: str | None = None,
        messages: list[Message] | None = None,
        options: ChatOptions | None = None,
    ) -> Prompt:
        """Create a prompt from raw user content or an explicit message list.

        Raises:
            ConfigurationError: If both ``content`` and ``messages`` are given.
        """
        has_content = content is not None and content.strip() != ""
        if has_content and messages:
            msg = "content and messages cannot be set at the same time"
            raise ConfigurationError(msg)
        if has_content:
            messages = [UserMessage(text=content or "")]
        return cls(messages=list(messages or []), options=options or ChatOptions())

    @property
    def contents(self) -> str:
        """All message texts concatenated in order."""
        return "".join(m.text for m in self.messages)

    @property
    def user_message(self) -> UserMessage:
        """The last user message, or an empty one if the prompt has none."""
        for message in reversed(self.messages):
            if isinstance(message, UserMessage):
                return message
        return UserMessage(text="")

    def copy(self) -> Prompt:  # type: ignore[override]
        return Prompt(
            messages=[copy_message(m) for m in self.messages],
            options=self.options.model_copy(
                update={"stop_sequences": list(self.options.stop_sequences)}
            ),
        )

    def augment_user_message(
        self, augmenter: str | Callable[[UserMessage], UserMessage]
    ) -> Prompt:
        """Return a new prompt with the last user message replaced.

        ``augmenter`` is either the new text or a function mapping the
        current user message to its replacement.  When the prompt has no
        user message, the augmented empty message is appended.
        """
        if isinstance(augmenter, str):
            text = augmenter

            def replace(message: UserMessage) -> UserMessage:
                return message.model_copy(update={"text": text})
        else:
            replace = augmenter

        messages: list[Message] = list(self.messages)
        for i in range(len(messages) - 1, -1, -1):
            message = messages[i]
            if isinstance(message, UserMessage):
                messages[i] = replace(message)
                break
        else:
            messages.append(replace(UserMessage(text="")))
        return Prompt(messages=messages, options=self.options)
