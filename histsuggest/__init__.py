"""histsuggest - interactive shell history suggest box for bash and zsh."""

__version__ = "0.8.0"
