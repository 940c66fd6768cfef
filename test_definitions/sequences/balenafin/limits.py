LIMITS = {}

LIMITS["Eeprom"] = {
    "vendor": {"limit": lambda measurement: "balena" in measurement.lower()},
    "product": {"limit": lambda measurement: measurement.startswith("balenaFin")},
}

LIMITS["Wifi"] = {
    "interface_present": {"limit": lambda measurement: measurement is True},
    "networks_found": {"limit": lambda measurement: measurement >= 1, "unit": "pcs"},
    # Measured only when the suite runs over wireless
    "connected_to_testbot": {
        "limit": lambda measurement: measurement is True,
        "optional": True,
    },
}

LIMITS["Bluetooth"] = {
    "hci0_running": {"limit": lambda measurement: measurement is True},
}

LIMITS["Ethernet"] = {
    "operstate": {"limit": lambda measurement: measurement == "up"},
    "speed": {"limit": lambda measurement: measurement >= 100, "unit": "Mbit/s"},
}

LIMITS["I2c"] = {
    "buses": {
        "limit": lambda measurement: "i2c-1" in measurement,
        "report_limit": "i2c-1 must be present",
    },
}

LIMITS["Spi"] = {
    "devices": {
        "limit": lambda measurement: {"spidev0.0", "spidev0.1"} <= set(measurement),
        "report_limit": "spidev0.0 and spidev0.1 must be present",
    },
}

LIMITS["Camera"] = {
    "supported": {"limit": lambda measurement: measurement == 1},
    "detected": {"limit": lambda measurement: measurement == 1},
}

LIMITS["Display"] = {
    "lcd_attached": {"limit": lambda measurement: measurement is True},
}

LIMITS["Usb"] = {
    "devices": {"limit": lambda measurement: measurement >= 2, "unit": "pcs"},
}

LIMITS["Gpio"] = {
    "gpiochips": {
        "limit": lambda measurement: "gpiochip0" in measurement,
        "report_limit": "gpiochip0 must be present",
    },
}

LIMITS["Hdmi"] = {
    "hdmi_active": {"limit": lambda measurement: measurement is True},
}

LIMITS["Rtc"] = {
    "name": {"limit": lambda measurement: "rv3028" in measurement},
    "readable": {"limit": lambda measurement: measurement is True},
}

LIMITS["Rgb"] = {
    "colors": {"limit": lambda measurement: measurement == ["blue", "green", "red"]},
}

LIMITS["Coprocessor"] = {
    "serial_device": {"limit": lambda measurement: measurement == "present"},
}

LIMITS["Power"] = {
    "throttled": {
        "limit": lambda measurement: measurement == 0,
        "report_limit": "No under-voltage or throttling flags",
    },
    "core_voltage": {"limit": lambda measurement: 1.1 < measurement < 1.45, "unit": "V"},
}
