"""
Syzygy tablebase server.

Usage:
    python -m tbserve --syzygy /path/to/syzygy
    curl 'http://127.0.0.1:5000/?fen=4k3/8/8/8/8/8/8/4K2R_w_K_-_0_1'
"""
