"""NoteSpace: shared workspaces, invitations and role-based note access."""

__version__ = "0.1.0"
