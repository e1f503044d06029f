"""Run context, logging and I/O boundaries shared by gatewayctl commands."""
