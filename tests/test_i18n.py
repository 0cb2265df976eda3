"""Language switch for the customer menu."""

from pathlib import Path

import pytest

from siptakip.client.i18n import Translator
from siptakip.client.storage import LANGUAGE_KEY, LocalStorage
from siptakip.services.order_status import OrderStatus


def test_language_defaults_to_turkish(tmp_path: Path) -> None:
    translator = Translator(LocalStorage(tmp_path))

    assert translator.language == "tr"
    assert translator.t("add_to_cart") == "Ekle"
    assert translator.category("Tatlılar") == "Tatlılar"
    assert translator.status(OrderStatus.READY) == "Hazır"


def test_switching_language_persists_and_translates_menu(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    Translator(storage).set_language("en")

    translator = Translator(storage)
    assert storage.get(LANGUAGE_KEY) == "en"
    assert translator.language == "en"
    assert translator.t("my_orders") == "My orders"
    assert translator.category("Ana Yemek") == "Main Course"
    assert translator.category("Şefin Önerisi") == "Şefin Önerisi"
    assert translator.status(OrderStatus.IN_KITCHEN) == "👨‍🍳 Preparing"


def test_missing_keys_fall_back_to_turkish_then_key(tmp_path: Path) -> None:
    translator = Translator(LocalStorage(tmp_path))
    translator.set_language("ar")

    assert translator.is_rtl is True
    assert translator.t("cart") == "السلة"
    assert translator.t("scan_qr") == "Lütfen masadaki QR kodu okutun."
    assert translator.t("unknown_label") == "unknown_label"


def test_unsupported_language_is_rejected(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    translator = Translator(storage)

    with pytest.raises(ValueError):
        translator.set_language("pl")
    storage.set(LANGUAGE_KEY, "xx")
    assert translator.language == "tr"
