"""Host-side collaborators: file persistence and standalone preview pages."""
