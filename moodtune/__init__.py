"""moodtune: mood tracking backend with Spotify recommendations and a chat assistant."""

__version__ = "0.1.0"
