"""Test configuration and fixtures."""

import logfire

# The app module instruments FastAPI on import; keep telemetry local
logfire.configure(send_to_logfire=False, console=False)
