from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Inbound: the Cloud API event envelope ---

class Metadata(BaseModel):
    display_phone_number: str | None = None
    phone_number_id: str | None = None


class Profile(BaseModel):
    name: str | None = None


class Contact(BaseModel):
    wa_id: str | None = None
    profile: Profile | None = None


class TextBody(BaseModel):
    body: str = ""


class Reply(BaseModel):
    id: str
    title: str | None = None


class Interactive(BaseModel):
    type: str | None = None
    list_reply: Reply | None = None
    button_reply: Reply | None = None

    @property
    def selected_id(self):
        """Id of the chosen row or button, list replies win."""
        if self.list_reply:
            return self.list_reply.id
        if self.button_reply:
            return self.button_reply.id
        return None


class TemplateLanguage(BaseModel):
    code: str | None = None


class Template(BaseModel):
    name: str | None = None
    language: TemplateLanguage | None = None


class Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    # The JSON field is named "from", which is a reserved keyword in Python.
    from_: str = Field(alias="from")
    timestamp: str | None = None
    type: str | None = None
    text: TextBody | None = None
    interactive: Interactive | None = None
    template: Template | None = None


class Value(BaseModel):
    messaging_product: str | None = None
    metadata: Metadata | None = None
    contacts: list[Contact] = []
    messages: list[Message] | None = None


class Change(BaseModel):
    field: str | None = None
    value: Value | None = None


class Entry(BaseModel):
    id: str | None = None
    changes: list[Change] = []


class WebhookEvent(BaseModel):
    object: str | None = None
    entry: list[Entry] = []

    def first_value(self):
        """Value of the first change of the first entry, or None."""
        if not self.entry or not self.entry[0].changes:
            return None
        return self.entry[0].changes[0].value


# --- Outbound: requests against the Graph API /messages endpoint ---

class MessageKind(str, Enum):
    TEXT = "text"
    BUTTON = "button"
    LIST = "list"
    TEMPLATE = "template"


class OutboundRequest(BaseModel):
    phone_number_id: str
    recipient: str
    kind: MessageKind
    payload: dict[str, Any]

    @classmethod
    def text(cls, phone_number_id, recipient, body):
        return cls(
            phone_number_id=phone_number_id,
            recipient=recipient,
            kind=MessageKind.TEXT,
            payload={"body": body},
        )

    @classmethod
    def buttons(cls, phone_number_id, recipient, body, buttons):
        """Reply-button message. `buttons` is a sequence of (id, title) pairs."""
        return cls(
            phone_number_id=phone_number_id,
            recipient=recipient,
            kind=MessageKind.BUTTON,
            payload={
                "body": {"text": body},
                "action": {
                    "buttons": [
                        {"type": "reply", "reply": {"id": button_id, "title": title}}
                        for button_id, title in buttons
                    ]
                },
            },
        )

    @classmethod
    def list_menu(cls, phone_number_id, recipient, header, body, footer, button, sections):
        return cls(
            phone_number_id=phone_number_id,
            recipient=recipient,
            kind=MessageKind.LIST,
            payload={
                "header": {"type": "text", "text": header},
                "body": {"text": body},
                "footer": {"text": footer},
                "action": {"button": button, "sections": sections},
            },
        )

    @classmethod
    def template(cls, phone_number_id, recipient, name, language_code, components=None):
        payload = {"name": name, "language": {"code": language_code}}
        if components:
            payload["components"] = components
        return cls(
            phone_number_id=phone_number_id,
            recipient=recipient,
            kind=MessageKind.TEMPLATE,
            payload=payload,
        )

    @property
    def button_ids(self):
        if self.kind is not MessageKind.BUTTON:
            return []
        return [b["reply"]["id"] for b in self.payload["action"]["buttons"]]

    def to_body(self) -> dict[str, Any]:
        """Renders the JSON body the Graph API expects for this message kind."""
        body = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": self.recipient,
        }

        if self.kind is MessageKind.TEXT:
            body["type"] = "text"
            body["text"] = self.payload
        elif self.kind is MessageKind.TEMPLATE:
            body["type"] = "template"
            body["template"] = self.payload
        else:
            # Buttons and lists are both interactive messages
            body["type"] = "interactive"
            body["interactive"] = {"type": self.kind.value, **self.payload}

        return body
