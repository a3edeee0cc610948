"""
QR symbol encoder backed by the `qrcode` library.

The library chooses the smallest version at or above `version_min` that fits
the payload; anything that needs a version above `version_max` is rejected.
"""

from __future__ import annotations

from typing import Dict

import qrcode
from qrcode import constants, util
from qrcode.exceptions import DataOverflowError

from qrgen.domain.errors import EncodeError
from qrgen.domain.matrix import Matrix
from qrgen.domain.models import EncoderConfig, ErrorCorrection
from qrgen.utils.logging import get_logger

log = get_logger(__name__)

_ECC_LEVELS: Dict[ErrorCorrection, int] = {
    ErrorCorrection.LOW: constants.ERROR_CORRECT_L,
    ErrorCorrection.MEDIUM: constants.ERROR_CORRECT_M,
    ErrorCorrection.QUARTILE: constants.ERROR_CORRECT_Q,
    ErrorCorrection.HIGH: constants.ERROR_CORRECT_H,
}

_MODE_NAMES: Dict[int, str] = {
    util.MODE_NUMBER: "Numeric",
    util.MODE_ALPHA_NUM: "Alphanumeric",
    util.MODE_8BIT_BYTE: "Byte",
    util.MODE_KANJI: "Kanji",
}


class QrCodeEncoder:
    """SymbolEncoder producing QR Code Model 2 matrices."""

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self.config = config or EncoderConfig()

    def encode(self, text: str) -> Matrix:
        config = self.config
        qr = qrcode.QRCode(
            version=None,
            error_correction=_ECC_LEVELS[config.error_correction],
            border=0,
            mask_pattern=config.mask,
        )
        try:
            qr.add_data(text)
            for segment in qr.data_list:
                log.debug(
                    "encoding mode = %s, character count = %d",
                    _MODE_NAMES.get(segment.mode, segment.mode),
                    len(segment),
                )
            version = qr.best_fit(start=config.version_min)
        except DataOverflowError as exc:
            raise EncodeError(
                f"payload does not fit in a version {config.version_max} symbol "
                f"at {config.error_correction.value} error correction"
            ) from exc
        except ValueError as exc:
            raise EncodeError(f"payload cannot be encoded: {exc}") from exc

        if version > config.version_max:
            raise EncodeError(
                f"payload needs version {version}, above the configured maximum "
                f"{config.version_max}"
            )

        if qr.mask_pattern is None:
            qr.mask_pattern = qr.best_mask_pattern()
        qr.make(fit=False)

        return Matrix.from_rows(
            qr.modules,
            version=version,
            error_correction=config.error_correction,
            mask=qr.mask_pattern,
        )


__all__ = ["QrCodeEncoder"]
