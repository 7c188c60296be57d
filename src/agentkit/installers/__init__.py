from agentkit.installers.copilot import CopilotInstaller
from agentkit.installers.protocol import ArtifactInstaller

__all__ = ["ArtifactInstaller", "CopilotInstaller"]
