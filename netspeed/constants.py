# Compiled-in configuration for the throughput sampler.

COUNTER_FILE = "/proc/net/dev"

# Seconds between two ticks; rates are always divided by this value.
REFRESH_INTERVAL = 3

# Column positions in a tokenized /proc/net/dev interface line:
# name, rx bytes/packets/errs/drop/fifo/frame/compressed/multicast, tx bytes ...
RX_BYTES_COLUMN = 1
TX_BYTES_COLUMN = 9

SCALE_FACTOR = 1000
SPEED_UNITS = ["B/s", "K/s", "M/s", "G/s", "T/s", "P/s", "E/s", "Z/s", "Y/s"]

# Interfaces whose name starts with one of these never count towards the total.
EXCLUDED_PREFIXES = (
    "lo",
    # Created by the "traffictoll" bandwidth manager.
    "ifb",
    # Created by the lxd container manager.
    "lxdbr",
    "virbr",
    "br",
    "vnet",
    "tun",
    "tap",
    "docker",
    "utun",
    "wg",
    "veth",
)
