"""filipec-install: register the ``filipec`` shell alias in bash or zsh."""

__version__ = "0.1.0"
