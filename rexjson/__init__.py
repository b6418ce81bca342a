"""Extract named regex captures from text lines and emit merged JSON."""
