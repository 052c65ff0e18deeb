"""Developer tooling: command line entry points and log reports."""
