import os
from pathlib import Path

from pydantic import BaseModel


class Settings(BaseModel):
    # Analyzer runtime
    ANALYZER_VERSION: str = os.getenv("ANALYZER_VERSION", "0.17")
    # e.g. "javax:javaee-api:7.0"; empty disables the platform API dependency
    PLATFORM_API_COORDINATE: str = os.getenv("PLATFORM_API_COORDINATE", "")
    JAVA_BIN: str = os.getenv("JAVA_BIN", "java")

    # Artifact resolution
    REMOTE_REPOSITORIES: str = os.getenv("REMOTE_REPOSITORIES", "https://repo.maven.apache.org/maven2")
    LOCAL_REPOSITORY: str = os.getenv("LOCAL_REPOSITORY", str(Path.home() / ".m2" / "repository"))
    RESOLVER_TIMEOUT: float = float(os.getenv("RESOLVER_TIMEOUT", "30"))

    # Output
    RESOURCES_DIR: str = os.getenv("RESOURCES_DIR", "jaxrs-analyzer")

    def remote_repositories(self) -> list[str]:
        return [r.strip() for r in self.REMOTE_REPOSITORIES.split(",") if r.strip()]


settings = Settings()
