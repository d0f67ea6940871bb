"""Rule-bound language model agent for Minecraft-style worlds."""
