from __future__ import annotations

from abc import ABC, abstractmethod

from jaxrs_pipeline.domain.models import AnalysisConfig, ClasspathSet, Resources


class AnalysisEngine(ABC):
    @abstractmethod
    def analyze(self, classpath: ClasspathSet, config: AnalysisConfig) -> Resources:
        """Analyse the project classes on ``classpath`` as described by ``config``."""
