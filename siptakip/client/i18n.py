"""Customer menu translations with a persisted language choice."""

from __future__ import annotations

from siptakip.client.storage import LANGUAGE_KEY, LocalStorage
from siptakip.services.order_status import OrderStatus

DEFAULT_LANGUAGE = "tr"

LANGUAGES: dict[str, str] = {
    "tr": "🇹🇷 Türkçe",
    "en": "🇬🇧 English",
    "ar": "🇸🇦 العربية",
    "de": "🇩🇪 Deutsch",
}

TRANSLATIONS: dict[str, dict[str, str]] = {
    "tr": {
        "language": "Dil",
        "menu": "Menü",
        "table": "Masa",
        "cart": "Sepet",
        "add_to_cart": "Ekle",
        "empty_cart": "Sepetiniz boş",
        "total": "Toplam",
        "note_optional": "Not (isteğe bağlı)",
        "create_order": "Sipariş ver",
        "order_success": "Siparişiniz alındı",
        "order_ready": "Siparişiniz hazır!",
        "my_orders": "Siparişlerim",
        "no_orders": "Henüz siparişiniz yok",
        "scan_qr": "Lütfen masadaki QR kodu okutun.",
        "menu_load_failed": "Menü açılamadı",
        "demo_menu": "Bağlantı yok: örnek menü gösteriliyor.",
    },
    "en": {
        "language": "Language",
        "menu": "Menu",
        "table": "Table",
        "cart": "Cart",
        "add_to_cart": "Add",
        "empty_cart": "Your cart is empty",
        "total": "Total",
        "note_optional": "Note (optional)",
        "create_order": "Place order",
        "order_success": "Your order has been received",
        "order_ready": "Your order is ready!",
        "my_orders": "My orders",
        "no_orders": "No orders yet",
        "scan_qr": "Please scan the QR code on your table.",
        "menu_load_failed": "The menu could not be loaded",
        "demo_menu": "No connection: showing a sample menu.",
    },
    "ar": {
        "language": "اللغة",
        "menu": "القائمة",
        "table": "طاولة",
        "cart": "السلة",
        "add_to_cart": "أضف للسلة",
        "empty_cart": "السلة فارغة",
        "total": "الإجمالي",
        "note_optional": "ملاحظة (اختياري)",
        "create_order": "إنشاء الطلب",
        "order_success": "تم استلام طلبك",
        "order_ready": "طلبك جاهز!",
        "my_orders": "طلباتي",
        "no_orders": "لا توجد طلبات بعد",
        "menu_load_failed": "تعذر تحميل القائمة",
    },
    "de": {
        "language": "Sprache",
        "menu": "Speisekarte",
        "table": "Tisch",
        "cart": "Warenkorb",
        "add_to_cart": "Hinzufügen",
        "empty_cart": "Ihr Warenkorb ist leer",
        "total": "Gesamt",
        "note_optional": "Anmerkung (optional)",
        "create_order": "Bestellen",
        "order_success": "Ihre Bestellung ist eingegangen",
        "order_ready": "Ihre Bestellung ist fertig!",
        "my_orders": "Meine Bestellungen",
        "no_orders": "Noch keine Bestellungen",
        "scan_qr": "Bitte scannen Sie den QR-Code auf Ihrem Tisch.",
        "menu_load_failed": "Die Speisekarte konnte nicht geladen werden",
        "demo_menu": "Keine Verbindung: Beispielkarte wird angezeigt.",
    },
}

STATUS_LABELS: dict[str, dict[OrderStatus, str]] = {
    "en": {
        OrderStatus.IN_KITCHEN: "👨‍🍳 Preparing",
        OrderStatus.READY: "✅ Ready",
        OrderStatus.DELIVERED: "🚀 Delivered",
        OrderStatus.COURIER_DELIVERED: "🏍️ Handed to courier",
        OrderStatus.PAID: "✓ Paid",
        OrderStatus.CANCELLED: "✕ Cancelled",
    },
    "ar": {
        OrderStatus.IN_KITCHEN: "👨‍🍳 قيد التحضير",
        OrderStatus.READY: "✅ جاهز",
        OrderStatus.DELIVERED: "🚀 تم التسليم",
        OrderStatus.COURIER_DELIVERED: "🏍️ تم تسليم الكوريير",
        OrderStatus.PAID: "✓ مدفوع",
        OrderStatus.CANCELLED: "✕ ملغي",
    },
    "de": {
        OrderStatus.IN_KITCHEN: "👨‍🍳 In Zubereitung",
        OrderStatus.READY: "✅ Fertig",
        OrderStatus.DELIVERED: "🚀 Serviert",
        OrderStatus.COURIER_DELIVERED: "🏍️ An Kurier übergeben",
        OrderStatus.PAID: "✓ Bezahlt",
        OrderStatus.CANCELLED: "✕ Storniert",
    },
}

# Category names are stored in Turkish; unknown names are shown as stored.
CATEGORY_NAMES: dict[str, dict[str, str]] = {
    "en": {
        "İçecekler": "Drinks",
        "Kahvaltı": "Breakfast",
        "Ana Yemek": "Main Course",
        "Tatlılar": "Desserts",
        "Kahveler": "Coffees",
        "Sıcak Kahveler": "Hot Coffees",
        "Soğuk Kahveler": "Iced Coffees",
        "Burgerler": "Burgers",
        "Pizzalar": "Pizzas",
        "Salatalar": "Salads",
        "Çorbalar": "Soups",
        "Başlangıçlar": "Starters",
        "Izgara": "Grill",
        "Makarnalar": "Pasta",
        "Sandviçler": "Sandwiches",
        "Aperatifler": "Snacks",
        "Diğer": "Other",
    },
    "ar": {
        "İçecekler": "المشروبات",
        "Kahvaltı": "الإفطار",
        "Ana Yemek": "الطبق الرئيسي",
        "Tatlılar": "الحلويات",
        "Kahveler": "القهوة",
        "Sıcak Kahveler": "القهوة الساخنة",
        "Soğuk Kahveler": "القهوة المثلجة",
        "Burgerler": "البرجر",
        "Pizzalar": "البيتزا",
        "Salatalar": "السلطات",
        "Çorbalar": "الشوربات",
        "Başlangıçlar": "المقبلات",
        "Izgara": "المشويات",
        "Makarnalar": "المعكرونة",
        "Sandviçler": "السندويشات",
        "Aperatifler": "المقبلات الخفيفة",
        "Diğer": "أخرى",
    },
    "de": {
        "İçecekler": "Getränke",
        "Kahvaltı": "Frühstück",
        "Ana Yemek": "Hauptgerichte",
        "Tatlılar": "Desserts",
        "Kahveler": "Kaffee",
        "Sıcak Kahveler": "Heißer Kaffee",
        "Soğuk Kahveler": "Eiskaffee",
        "Burgerler": "Burger",
        "Pizzalar": "Pizza",
        "Salatalar": "Salate",
        "Çorbalar": "Suppen",
        "Başlangıçlar": "Vorspeisen",
        "Izgara": "Grill",
        "Makarnalar": "Pasta",
        "Sandviçler": "Sandwiches",
        "Aperatifler": "Snacks",
        "Diğer": "Sonstiges",
    },
}


class Translator:
    """Look up UI strings in the language stored under ``app_language``.

    Missing keys fall back to Turkish, then to the key itself.
    """

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage

    @property
    def language(self) -> str:
        stored = self.storage.get(LANGUAGE_KEY)
        return stored if stored in TRANSLATIONS else DEFAULT_LANGUAGE

    @property
    def is_rtl(self) -> bool:
        return self.language == "ar"

    def set_language(self, language: str) -> None:
        if language not in TRANSLATIONS:
            raise ValueError(f"Unsupported language: {language}")
        self.storage.set(LANGUAGE_KEY, language)

    def t(self, key: str) -> str:
        return TRANSLATIONS[self.language].get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key) or key

    def category(self, name: str) -> str:
        return CATEGORY_NAMES.get(self.language, {}).get(name, name)

    def status(self, status: OrderStatus) -> str:
        return STATUS_LABELS.get(self.language, {}).get(status, status.value)
