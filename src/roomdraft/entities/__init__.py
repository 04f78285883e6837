"""Wall-attached entities: door and window placement."""
