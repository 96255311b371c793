"""Constants shared across the container."""

# Class attribute holding the ordered dependency identifiers of a service class
CONSTRUCTOR_ARGUMENTS_ATTRIBUTE = "__constructor_arguments__"

ENV_PREFIX = "DI_CONTAINER_"

DEFAULT_LOG_LEVEL = "WARNING"
