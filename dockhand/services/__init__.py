"""Services for dockhand."""
