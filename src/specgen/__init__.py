"""specgen -- Generate API request modules from OpenAPI 2.0 (Swagger) documents.

This package converts a Swagger document into one source file per tag, each
holding a request function for every operation carrying that tag. TypeScript
output ships a shared interface file; JavaScript output ships JSDoc typedefs
instead. A sibling mock generator writes example responses for every
operation.

Typical workflow::

    specgen gen --source ./swagger.json --root ./src/api --lang ts
    specgen mock --source ./swagger.json --mock-root ./mock

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Option precedence and default merging.
    pipeline: The generation state machine.
    mock: Mock response generation.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
