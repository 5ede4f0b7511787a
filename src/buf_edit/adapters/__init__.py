"""Host integrations for buf_edit buffers."""
