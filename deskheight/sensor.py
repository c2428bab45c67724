"""Desk height sensor that reads a controller's serial stream and publishes heights."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from .decoders import Decoder
from .variant import DecoderVariant, make_decoder, variant_name

logger = logging.getLogger(__name__)

DETECTION_TIMEOUT_MS = 1000
_LAST_VARIANT = max(DecoderVariant)


class ByteSource(Protocol):
    """A serial port that hands back whatever bytes are waiting, without blocking."""

    def read(self) -> bytes: ...


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class StandingDeskHeightSensor:
    """Feeds serial bytes to a decoder, detects the protocol if needed, publishes heights."""

    def __init__(
        self,
        uart: ByteSource,
        publish: Callable[[float], None] | None = None,
        variant: int = DecoderVariant.UNKNOWN,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.uart = uart
        self._publish = publish if publish is not None else (lambda height: None)
        self._clock = clock if clock is not None else _monotonic_ms
        self.decoder: Decoder | None = None
        self.variant = DecoderVariant.UNKNOWN
        self.last_read = -1.0
        self._last_published = -1.0
        self.is_detecting = False
        self._started_detecting_at = 0
        self.set_decoder_variant(variant)

    def set_decoder_variant(self, variant: int) -> None:
        """Switch to the decoder for the given variant; UNKNOWN leaves no decoder."""
        decoder = make_decoder(variant)
        self.variant = DecoderVariant(variant)
        self.decoder = decoder

    def start_decoder_detection(self) -> None:
        """Try each known protocol in turn until one yields a height."""
        logger.info("Starting decoder detection")
        self.variant = DecoderVariant.UNKNOWN
        self._try_next_decoder()

    def _try_next_decoder(self) -> None:
        if self.variant == _LAST_VARIANT:
            logger.warning(
                "No valid decoder found. Please make sure your desk is reporting "
                "the height and you can see it on the keypad"
            )
            self.decoder = None
            self.variant = DecoderVariant.UNKNOWN
            self.is_detecting = False
            return

        self.set_decoder_variant(self.variant + 1)
        logger.debug("Attempting next decoder variant: %s", variant_name(self.variant))
        self.last_read = -1.0
        self._started_detecting_at = self._clock()
        self.is_detecting = True

    def setup(self) -> None:
        if self.variant == DecoderVariant.UNKNOWN:
            logger.debug("Decoder variant was not set in config; using decoder detection")
            self.start_decoder_detection()
        else:
            logger.debug("Using hardcoded decoder variant %s", variant_name(self.variant))

    def loop(self) -> None:
        """Consume waiting bytes and advance protocol detection."""
        for byte in self.uart.read():
            if self.decoder is not None and self.decoder.put(byte):
                self.last_read = self.decoder.decode()
                logger.debug("Got desk height: %f", self.last_read)

        if not self.is_detecting:
            return
        name = variant_name(self.variant)
        if self.last_read != -1:
            self.is_detecting = False
            logger.info("Decoder detection complete. Correct decoder variant: %s", name)
            logger.info(
                "If you want to make this change permanent, add the following "
                "to this sensor's configuration:"
            )
            logger.info("  variant: %s", name)
        elif self._clock() - self._started_detecting_at > DETECTION_TIMEOUT_MS:
            logger.debug("Decoder %s does not appear to work; trying next decoder", name)
            self._try_next_decoder()

    def update(self) -> None:
        """Publish the latest height if it is positive and has changed."""
        if self.last_read > 0 and self.last_read != self._last_published:
            self._publish(self.last_read)
            self._last_published = self.last_read

    def dump_config(self) -> str:
        """Log the configuration and return it as text."""
        lines = [
            "Standing Desk Height:",
            f"  Decoder Variant: {variant_name(self.variant)}",
        ]
        for line in lines:
            logger.info("%s", line)
        return "\n".join(lines)


class DetectDecoderAction:
    """Automation action that restarts protocol detection on a sensor."""

    def __init__(self, sensor: StandingDeskHeightSensor) -> None:
        self.sensor = sensor

    def play(self, *args: object) -> None:
        self.sensor.start_decoder_detection()