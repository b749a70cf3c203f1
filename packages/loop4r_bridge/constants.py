"""
Loop4r wire constants.

Control-change numbers understood by the pedalboard firmware, pedal slot
layout, and the tick counts used by the blink and liveness state machines.
"""

# Control-surface frame status byte (control change, channel 1)
CONTROL_CHANGE = 0xB0

# Control-change numbers
CC_LED_ON = 106
CC_LED_OFF = 107
CC_DISPLAY_TENS = 113
CC_DISPLAY_ONES = 114

# Fixed "engine alive" indicator, driven by heartbeats only
HEARTBEAT_LED = 23

# Pedal layout
NUM_LED_PEDALS = 10
UP = 10
DOWN = 11

# Blink timer reloads (ticks)
TIMER_OFF = 0
TIMER_FASTBLINK = 1
TIMER_BLINK = 3

# Liveness countdown (ticks)
HEARTBEAT_RESET = 5
HEARTBEAT_PING_AT = 0
HEARTBEAT_DEAD_BELOW = -5

# Scheduler period (seconds)
TICK_INTERVAL = 0.2

# Control protocol addresses
ENGINE_PREFIX = "/loop4r"
PINGACK_ADDRESS = "/pingack"
HEARTBEAT_ADDRESS = "/heartbeat"
LED_ADDRESS = "/led"
DISPLAY_ADDRESS = "/display"
