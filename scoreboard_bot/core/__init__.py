"""Core bot components: rendering, publishing, Discord surface, keepalive and lifecycle."""
