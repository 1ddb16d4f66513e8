"""JSON output mode utilities."""

import json
from typing import Any

from rich.console import Console

from src.keys import AuthorizedItems, AuthorizedKeys, Identity, PublicKey


class CLIJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles key and item types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (PublicKey, Identity)):
            return str(obj)
        if isinstance(obj, AuthorizedKeys):
            return [str(key) for key in obj]
        if isinstance(obj, AuthorizedItems):
            return obj.to_strings()
        return super().default(obj)


def json_output(console: Console, data: Any) -> None:
    """Output data as formatted JSON."""
    console.print_json(json.dumps(data, cls=CLIJSONEncoder))
