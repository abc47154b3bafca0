# config.py

# inference
N_SAMPLES = 101
EPS = 1e-9

# metric universes (brightness is mean luma, the rest are percentages)
BRIGHTNESS_RANGE = (0.0, 255.0)
PERCENT_RANGE = (0.0, 100.0)

# metric extraction scales
CONTRAST_STD_REF = 128.0
SHARPNESS_RMS_REF = 50.0
NOISE_DIFF_REF = 30.0

# camera
CAM_INDEX = 0
CAP_FPS = 30
UPDATE_HZ = 2
EWMA_ALPHA = 0.35
WINDOW_W, WINDOW_H = 1280, 720

# outputs
UDP_HOST = "127.0.0.1"
UDP_PORT = 5005

# caller-side memo
CACHE_DECIMALS = 2
CACHE_SIZE = 256

# logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
