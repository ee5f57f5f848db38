"""SkyBook — conversational flight booking over a tool-calling chat model."""
