"""Static trigger metadata exposed to the host workflow editor."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from discord_trigger.domain.models import parse_flag

DISPLAY_NAME = "Discord Trigger"
NAME = "discordTrigger"
CREDENTIAL_NAME = "discordBotApi"
SETUP_WEBHOOK = "setup"
WEBHOOK_PATH = "webhook"


@dataclass(frozen=True)
class ParameterOption:
    name: str
    value: str
    description: str = ""


@dataclass(frozen=True)
class TriggerParameter:
    display_name: str
    name: str
    type: str
    default: Any
    required: bool = False
    description: str = ""
    options: Tuple[ParameterOption, ...] = ()
    load_options_method: Optional[str] = None
    # parameter name -> values for which this parameter is shown
    show_when: Dict[str, Tuple[Any, ...]] = field(default_factory=dict)

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        return all(values.get(k) in allowed for k, allowed in self.show_when.items())


PARAMETERS: List[TriggerParameter] = [
    TriggerParameter(
        display_name="Event",
        name="event",
        type="options",
        default="messageCreated",
        required=True,
        options=(
            ParameterOption(
                name="Message Created",
                value="messageCreated",
                description="Triggered when a message is created",
            ),
        ),
    ),
    TriggerParameter(
        display_name="Channel",
        name="channelId",
        type="options",
        default="",
        required=True,
        description="Select the channel to listen to",
        load_options_method="getChannels",
    ),
    TriggerParameter(
        display_name="Only Messages from Bot",
        name="onlyBot",
        type="boolean",
        default=False,
    ),
    TriggerParameter(
        display_name="Bot ID",
        name="botId",
        type="string",
        default="",
        show_when={"onlyBot": (True,)},
    ),
]


def resolve_parameters(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply defaults and drop values of parameters that are hidden."""
    values = {p.name: raw.get(p.name, p.default) for p in PARAMETERS}
    for p in PARAMETERS:
        if p.type == "boolean":
            values[p.name] = parse_flag(values[p.name])
    for p in PARAMETERS:
        if not p.is_visible(values):
            values[p.name] = p.default
    return values
