"""Formatting of knowledge-store responses for the assistant."""

import json
from typing import Any


def format_briefing(context: dict[str, Any]) -> str:
    """Render a context response as a markdown briefing."""
    lines = ["# Memory Briefing", ""]

    greeting = context.get("greeting")
    if greeting:
        lines += [str(greeting), ""]

    last_session = context.get("lastSession")
    if last_session:
        lines.append("## Last Session")
        lines.append(f"- Started: {last_session.get('startedAt')}")
        lines.append(f"- Ended: {last_session.get('endedAt')}")
        if last_session.get("summary"):
            lines.append(f"- Summary: {last_session['summary']}")
        lines.append("")

    todos = context.get("todos") or []
    if todos:
        lines.append("## Pending Todos")
        for todo in todos:
            lines.append(
                f"- [{todo.get('priority')}] {todo.get('title')}: {todo.get('description')}"
            )
        lines.append("")

    ports = context.get("ports") or []
    if ports:
        lines.append("## Port Assignments")
        for port in ports:
            lines.append(
                f"- :{port.get('port')} - {port.get('service')}: {port.get('description')}"
            )
        lines.append("")

    return "\n".join(lines) + "\n"


def format_ports(data: Any) -> str:
    """Render the port registry, falling back to JSON for other shapes."""
    if not isinstance(data, list):
        return to_json(data)

    lines = ["# Port Assignments", ""]
    for port in data:
        lines.append(
            f"- **:{port.get('port')}** - {port.get('service')}: {port.get('description')}"
        )
    return "\n".join(lines) + "\n"


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2)
