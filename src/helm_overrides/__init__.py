"""Override values of Flux HelmRelease resources from a declarative config."""

__version__ = "0.1.0"
