import re
from enum import Enum

import logging_utils
import messages
from schema import OutboundRequest, WebhookEvent

SUBSCRIBE_MODE = "subscribe"

GREETING_KEYWORDS = ("hi", "hello", "hey", "good morning", "good afternoon", "good evening")
THANKS_KEYWORDS = ("thank you", "thanks", "ok", "okay", "tnx")

DEFAULT_PROFILE_NAME = "User"


class ChallengeRejected(Exception):
    """The subscription handshake did not match the configured secret."""


class Intent(str, Enum):
    GREETING = "greeting"
    THANKS = "thanks"
    OTHER = "other"


def _keyword_pattern(keywords, whole_word):
    # Keywords must start a word, so "ok" does not fire on "book".
    # Greetings must also end one ("hi" is not "his"); thanks may run on ("thanksss").
    alternatives = "|".join(re.escape(k) for k in keywords)
    end = r"\b" if whole_word else ""
    return re.compile(rf"\b(?:{alternatives}){end}", re.IGNORECASE)


_GREETING_RE = _keyword_pattern(GREETING_KEYWORDS, whole_word=True)
_THANKS_RE = _keyword_pattern(THANKS_KEYWORDS, whole_word=False)


def classify_text(text):
    """Maps free text onto an Intent. Greetings are checked before thanks."""
    text = (text or "").strip()
    if _GREETING_RE.search(text):
        return Intent.GREETING
    if _THANKS_RE.search(text):
        return Intent.THANKS
    return Intent.OTHER


def verify_challenge(mode, token, challenge, expected_token):
    """
    Returns the challenge to echo back, or raises ChallengeRejected.
    An unset expected token never verifies.
    """
    if not expected_token or mode != SUBSCRIBE_MODE or token != expected_token:
        raise ChallengeRejected("webhook verification failed")
    return challenge or ""


class Dispatcher:
    """Turns one inbound event into the list of outbound requests to send."""

    def __init__(self, settings):
        self.settings = settings

    def handle_event(self, event: WebhookEvent) -> list[OutboundRequest]:
        value = event.first_value()
        phone_number_id = value.metadata.phone_number_id if value and value.metadata else None

        if not phone_number_id or not value.messages:
            logging_utils.log_event("dispatch_skipped", reason="no_messages_or_phone_number_id")
            return []

        # Only the first message is handled, the rest of the batch is dropped
        message = value.messages[0]
        recipient = message.from_
        name = self._profile_name(value)

        if message.type == "interactive" and message.interactive:
            return self._handle_interactive(phone_number_id, recipient, name, message.interactive.selected_id)

        if message.text:
            return self._handle_text(phone_number_id, recipient, name, message.text.body)

        logging_utils.log_event(
            "dispatch_ignored", message_id=message.id, message_type=message.type
        )
        return []

    @staticmethod
    def _profile_name(value):
        if value.contacts and value.contacts[0].profile and value.contacts[0].profile.name:
            return value.contacts[0].profile.name
        return DEFAULT_PROFILE_NAME

    def _handle_interactive(self, phone_number_id, recipient, name, selected_id):
        logging_utils.log_event("interactive_reply", selected_id=selected_id)

        if selected_id in messages.SERVICES:
            return [self.service_detail(phone_number_id, recipient, selected_id)]

        if selected_id and selected_id.endswith(messages.LEARN_MORE_SUFFIX):
            prefix = selected_id[: -len(messages.LEARN_MORE_SUFFIX)]
            if prefix in messages.DETAILS:
                return [
                    OutboundRequest.buttons(
                        phone_number_id, recipient, messages.DETAILS[prefix], messages.DETAIL_BUTTONS
                    )
                ]

        if selected_id == messages.CONTACT_US:
            return [OutboundRequest.text(phone_number_id, recipient, messages.CONTACT_TEXT)]

        if selected_id == messages.FEEDBACK_FORM:
            return [OutboundRequest.text(phone_number_id, recipient, messages.FEEDBACK_TEXT)]

        if selected_id == messages.BACK_TO_MENU:
            return [self.menu(phone_number_id, recipient, name)]

        logging_utils.log_event("interactive_unknown", level="WARNING", selected_id=selected_id)
        return []

    def _handle_text(self, phone_number_id, recipient, name, body):
        intent = classify_text(body)
        logging_utils.log_event("text_message", intent=intent.value)

        if intent is Intent.THANKS:
            return [
                OutboundRequest.text(phone_number_id, recipient, messages.THANKS_TEXT),
                OutboundRequest.text(phone_number_id, recipient, messages.CONTACT_TEXT),
            ]

        replies = []
        if intent is Intent.GREETING and self.settings.welcome_template:
            replies.append(
                OutboundRequest.template(
                    phone_number_id,
                    recipient,
                    self.settings.welcome_template,
                    self.settings.welcome_template_language,
                )
            )
        # Unrecognised text falls back to the menu as well
        replies.append(self.menu(phone_number_id, recipient, name))
        return replies

    @staticmethod
    def service_detail(phone_number_id, recipient, service_id):
        buttons = [
            (messages.service_prefix(service_id) + messages.LEARN_MORE_SUFFIX, "📖 Know More"),
            *messages.SERVICE_BUTTONS_TAIL,
        ]
        return OutboundRequest.buttons(phone_number_id, recipient, messages.SERVICES[service_id], buttons)

    @staticmethod
    def menu(phone_number_id, recipient, name):
        return OutboundRequest.list_menu(
            phone_number_id,
            recipient,
            header=messages.menu_header(name),
            body=messages.MENU_BODY,
            footer=messages.MENU_FOOTER,
            button=messages.MENU_BUTTON,
            sections=messages.MENU_SECTIONS,
        )
