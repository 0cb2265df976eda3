"""Shared client wiring for the Streamlit screens."""

from dataclasses import dataclass
from datetime import datetime
import time
from typing import Any

import streamlit as st

from siptakip.client.admin_store import AdminStore
from siptakip.client.auth_store import AuthStore
from siptakip.client.cart_store import CartStore
from siptakip.client.gateway import ApiError, ApiGateway, UnauthorizedError
from siptakip.client.i18n import Translator
from siptakip.client.order_store import OrderStore
from siptakip.client.storage import LocalStorage
from siptakip.core.config import settings


@dataclass
class ClientContext:
    storage: LocalStorage
    gateway: ApiGateway
    auth: AuthStore
    cart: CartStore
    orders: OrderStore
    admin: AdminStore
    i18n: Translator


def get_context() -> ClientContext:
    if "client" not in st.session_state:
        storage = LocalStorage(settings.client_storage_dir)
        gateway = ApiGateway(storage)
        st.session_state["client"] = ClientContext(
            storage=storage,
            gateway=gateway,
            auth=AuthStore(gateway, storage),
            cart=CartStore(storage),
            orders=OrderStore(gateway, storage),
            admin=AdminStore(gateway, storage),
            i18n=Translator(storage),
        )
    return st.session_state["client"]


def require_role(*roles: str) -> ClientContext:
    """Show the staff login form until a user with one of ``roles`` is signed in."""
    ctx = get_context()
    if ctx.auth.is_authenticated and ctx.auth.role in roles:
        return ctx

    with st.form("login"):
        login_name = st.text_input("E-posta veya kullanıcı adı")
        password = st.text_input("Şifre", type="password")
        if st.form_submit_button("Giriş"):
            try:
                if "@" in login_name:
                    ctx.auth.login(password, email=login_name)
                else:
                    ctx.auth.login(password, username=login_name)
            except ApiError as exc:
                st.error(exc.message)
            else:
                st.rerun()
    st.stop()


def refresh_orders(ctx: ClientContext) -> None:
    """Refresh the order list; an expired session reruns into the login form."""
    try:
        ctx.orders.refresh()
    except UnauthorizedError:
        st.rerun()


def api_get(ctx: ClientContext, path: str, params: dict[str, Any] | None = None) -> Any:
    try:
        return ctx.gateway.get(path, params=params)
    except UnauthorizedError:
        st.rerun()


def connection_badge(ctx: ClientContext) -> None:
    if ctx.orders.online:
        st.caption(f"Çevrimiçi · {now_string()}")
    else:
        pending = len(ctx.orders.outbox)
        st.warning(f"Çevrimdışı: kayıtlı veriler gösteriliyor ({pending} bekleyen işlem)")


def auto_refresh(seconds: float | None = None) -> None:
    time.sleep(seconds or settings.poll_interval_seconds)
    st.rerun()


def now_string() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M")
