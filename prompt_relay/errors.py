"""Fatal error types. Anything raised from here ends the run with exit code 1."""


class PromptRelayError(Exception):
    pass


class ConfigError(PromptRelayError):
    pass


class OptionsError(PromptRelayError):
    pass


class PromptFileError(PromptRelayError):
    pass
