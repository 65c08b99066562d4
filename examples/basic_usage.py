#!/usr/bin/env python3
"""Basic usage example"""

import uuid

from loggregator_emitter import EmitterConfig, create_emitter

def main():
    # Configure once, then create the emitter
    config = (EmitterConfig()
        .with_blocking(True)
        .with_source_name("App")
        .with_source_id("0"))

    app_id = uuid.UUID("00000000-0000-0000-0000-000000000001")

    with create_emitter("127.0.0.1", 3456, "loggregator-secret", config) as emitter:
        emitter.emit(app_id, "Application started")
        emitter.emit(str(app_id), "Same application, string id")
        emitter.emit_error(app_id, "This goes to stderr")

if __name__ == "__main__":
    main()
