"""Framework defaults and environment variable names."""

# Number of realizations when neither the call nor the config specifies one
DEFAULT_REALIZATIONS = 1

# Execution policy used when none is configured
DEFAULT_EXECUTOR = "serial"

# Recognized execution policy names
EXECUTORS = ("serial", "thread", "process")

# Environment variables read by ExecutionConfig.from_env()
ENV_EXECUTOR = "GEOSOLVE_EXECUTOR"
ENV_MAX_WORKERS = "GEOSOLVE_MAX_WORKERS"
ENV_DEFAULT_REALIZATIONS = "GEOSOLVE_DEFAULT_REALIZATIONS"
ENV_SEED = "GEOSOLVE_SEED"

# Variable names are identifiers: letter or underscore, then word characters
VARIABLE_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"
