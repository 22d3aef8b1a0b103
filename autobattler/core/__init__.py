"""Engine-independent building blocks: data, events, timing and configuration."""
