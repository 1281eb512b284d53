"""Prompt templates for the pfSense assistant relay."""

from __future__ import annotations

from string import Template

# --- Assistant instruction wrapping the user's request ---

PFSENSE_ASSISTANT = Template(
    "You are a helpful pfSense network security assistant. "
    "A user wants to know about a firewall rule or security best practice. "
    "They describe their request as: '$user_prompt'. "
    "Provide a clear, concise, and helpful explanation or suggestion for their pfSense setup. "
    "Use a friendly and encouraging tone. "
    "Do not provide code, only descriptive text."
)


# Map of named templates
TEMPLATES: dict[str, Template] = {
    "pfsense_assistant": PFSENSE_ASSISTANT,
}


def render_prompt(user_prompt: str, template_name: str = "pfsense_assistant") -> str:
    """Substitute the user's text into a named template, verbatim."""
    return TEMPLATES[template_name].substitute(user_prompt=user_prompt)
