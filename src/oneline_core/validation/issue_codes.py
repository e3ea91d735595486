# src/oneline_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class DiagramIssueCode(Enum):
    """
    Registry of diagram validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Conductor Reference Issues (CONDUCTOR_...) ---
    CONDUCTOR_DANGLING_DEVICE = ("CONDUCTOR_DANGLING_DEVICE", "Conductor '{conductor_id}' references device '{device_id}', which does not exist. It is excluded from energization.")
    CONDUCTOR_PORT_RANGE = ("CONDUCTOR_PORT_RANGE", "Conductor '{conductor_id}' references terminal {port} of device '{device_id}' ({device_type}), which only has terminals 0..{max_port}. It is excluded from energization.")
    CONDUCTOR_SELF_LOOP = ("CONDUCTOR_SELF_LOOP", "Conductor '{conductor_id}' joins terminal {port} of device '{device_id}' to itself and has no effect.")
    CONDUCTOR_ROLE_MISMATCH = ("CONDUCTOR_ROLE_MISMATCH", "Conductor '{conductor_id}' joins the {role_a}-side of '{device_a}' to the {role_b}-side of '{device_b}'.")
    CONDUCTOR_ID_DUPLICATE = ("CONDUCTOR_ID_DUPLICATE", "Conductor id '{conductor_id}' is used by {count} conductors. Conductor ids must be unique.")

    # --- Device Issues (DEVICE_... / SOURCE_...) ---
    SOURCE_SIGNAL_MISSING = ("SOURCE_SIGNAL_MISSING", "Source '{device_id}' declares no signal kind and will never energize anything.")
    DEVICE_ISOLATED = ("DEVICE_ISOLATED", "Device '{device_id}' ({device_type}) has no conductors attached.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
