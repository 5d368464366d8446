from abc import ABC, abstractmethod

class CredentialProvider(ABC):
    @abstractmethod
    def get_credentials(self) -> dict:
        """Return the flat connection dict consumed by the connector."""
        raise NotImplementedError("Subclasses must implement get_credentials")
