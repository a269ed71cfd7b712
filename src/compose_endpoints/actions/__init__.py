"""Actions package - Everything that turns discovery results into output.

Actions never run remote commands; they only render what the scanner found.
"""

from compose_endpoints.actions.endpoint_table import format_endpoint_table

__all__ = ["format_endpoint_table"]
