"""Runtime layer: settings, market data, execution, persistence, and the analysis loop."""
