"""Static artifact synthesizer: one file on disk for every canonical catalog route."""
