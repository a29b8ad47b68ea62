"""Keep package.json in step with the modules a project requires."""

__version__ = "0.1.0"
