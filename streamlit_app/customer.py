"""QR menu: browse, fill the cart and track the table's orders."""

import streamlit as st

from siptakip.client.gateway import ApiError, ServiceUnavailableError
from siptakip.client.i18n import LANGUAGES
from siptakip.client.menu_store import MenuStore
from siptakip.services.order_status import OrderStatus
from streamlit_app.common import auto_refresh, get_context, refresh_orders

st.set_page_config(page_title="Menü", layout="centered")
ctx = get_context()
tr = ctx.i18n

params = st.query_params
slug = params.get("r")
table_param = params.get("table")

signed_in = ctx.auth.is_authenticated and ctx.auth.role == "customer"
if not signed_in or (table_param and ctx.auth.table_number != int(table_param)):
    if not slug or not table_param:
        st.error(tr.t("scan_qr"))
        st.stop()
    try:
        ctx.auth.customer_login(slug, int(table_param))
    except (ApiError, ServiceUnavailableError) as exc:
        st.error(f"{tr.t('menu_load_failed')}: {exc}")
        st.stop()

menu = st.session_state.setdefault("menu", MenuStore(ctx.gateway, ctx.auth.restaurant_id))
if not menu.products:
    menu.load()

codes = list(LANGUAGES)
language = st.selectbox(
    tr.t("language"),
    codes,
    index=codes.index(tr.language),
    format_func=LANGUAGES.get,
)
if language != tr.language:
    tr.set_language(language)
    st.rerun()
if tr.is_rtl:
    st.markdown("<style>.main { direction: rtl; }</style>", unsafe_allow_html=True)

st.title(menu.restaurant_name)
st.caption(f"{tr.t('table')} {ctx.auth.table_number}")
if menu.using_demo:
    st.info(tr.t("demo_menu"))

for group, categories in menu.grouped_categories().items():
    st.header(tr.category(group))
    for category in categories:
        if len(categories) > 1:
            st.subheader(f"{category['icon']} {tr.category(category['name'])}")
        for product in menu.items_by_category(category["id"]):
            cols = st.columns([4, 1, 1])
            cols[0].markdown(f"**{product['name']}**  \n{product.get('description') or ''}")
            cols[1].write(f"{product['price']} ₺")
            if cols[2].button(tr.t("add_to_cart"), key=f"add_{product['id']}"):
                ctx.cart.add(product)

with st.sidebar:
    st.header(f"{tr.t('cart')} ({ctx.cart.item_count})")
    if not ctx.cart.lines:
        st.caption(tr.t("empty_cart"))
    for line in ctx.cart.lines:
        quantity = st.number_input(line.name, min_value=0, value=line.quantity, key=f"qty_{line.product_id}")
        if quantity != line.quantity:
            ctx.cart.update_quantity(line.product_id, int(quantity))
            st.rerun()
    st.write(f"{tr.t('total')}: **{ctx.cart.total} ₺**")
    note = st.text_area(tr.t("note_optional"))
    if st.button(tr.t("create_order"), disabled=not ctx.cart.lines):
        try:
            order = ctx.orders.create_order(ctx.cart.lines, table_number=ctx.auth.table_number, note=note)
        except ApiError as exc:
            st.error(exc.message)
        else:
            ctx.cart.clear()
            st.success(f"{tr.t('order_success')}: {order.order_id}")

refresh_orders(ctx)
for code, _, new_status in ctx.orders.status_changes:
    if new_status == OrderStatus.READY:
        st.toast(f"{code}: {tr.t('order_ready')}")

st.header(tr.t("my_orders"))
table_orders = ctx.orders.orders_by_table(ctx.auth.table_number or 0)
if not table_orders:
    st.caption(tr.t("no_orders"))
for order in table_orders:
    st.write(f"{order.order_id} · {tr.status(order.status)} · {order.totals.total} ₺")

auto_refresh()
