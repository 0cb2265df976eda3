"""Cashier and restaurant admin: payments, third-party orders, menu, tables, waiters and reports."""

from datetime import date
from decimal import Decimal

import streamlit as st

from siptakip.client.gateway import ApiError, ServiceUnavailableError
from siptakip.client.menu_store import MenuStore
from siptakip.client.order_store import SOURCE_LABELS
from siptakip.services.order_status import OrderSource, OrderStatus
from streamlit_app.common import api_get, connection_badge, now_string, refresh_orders, require_role

st.set_page_config(page_title="Kasa", layout="wide")
st.title("Kasa / Yönetim")
ctx = require_role("admin")
refresh_orders(ctx)
connection_badge(ctx)

menu = st.session_state.setdefault("admin_menu", MenuStore(ctx.gateway, ctx.auth.restaurant_id))
if not menu.categories:
    menu.load(include_unavailable=True)

payments, third_party_tab, menu_tab, tables_tab, waiters_tab, reports = st.tabs(
    ["Ödemeler", "Dış sipariş", "Menü", "Masalar", "Garsonlar", "Rapor"]
)

with payments:
    cols = st.columns(2)
    cols[0].metric("Bugünkü sipariş", ctx.orders.today_order_count())
    cols[1].metric("Toplam ciro", f"{ctx.orders.total_revenue} ₺")
    for table_number, group in ctx.orders.table_payment_summary().items():
        with st.expander(f"Masa {table_number} · {group['total']} ₺"):
            for order in group["orders"]:
                st.write(f"{order.order_id}: {order.totals.total} ₺")
            if st.button("Ödendi", key=f"pay_{table_number}"):
                try:
                    for order in group["orders"]:
                        ctx.orders.update_order_status(order.order_id, OrderStatus.PAID)
                except ApiError as exc:
                    st.error(exc.message)
                st.rerun()
    for order in ctx.orders.courier_orders:
        if st.button(f"{order.order_id} ({order.table.waiter_name}) ödendi", key=f"pay_{order.order_id}"):
            try:
                ctx.orders.update_order_status(order.order_id, OrderStatus.PAID)
            except ApiError as exc:
                st.error(exc.message)
            st.rerun()

with third_party_tab:
    st.caption("Yemeksepeti, Trendyol ve Getir siparişleri; kurye teslimi garson ekranından yapılır.")
    with st.form("third_party_order", clear_on_submit=True):
        platform = st.selectbox(
            "Platform",
            [source for source in OrderSource if source != OrderSource.RESTAURANT],
            format_func=SOURCE_LABELS.get,
        )
        quantities: dict[str, int] = {}
        for group, categories in menu.grouped_categories().items():
            st.markdown(f"**{group}**")
            for category in categories:
                for product in menu.items_by_category(category["id"]):
                    if not product["is_available"]:
                        continue
                    quantities[product["id"]] = int(
                        st.number_input(
                            f"{product['name']} ({product['price']} ₺)",
                            min_value=0,
                            step=1,
                            key=f"tp_{product['id']}",
                        )
                    )
        note = st.text_input("Not")
        if st.form_submit_button("Sipariş oluştur"):
            lines = menu.cart_lines(quantities)
            if not lines:
                st.warning("En az bir ürün seçin.")
            else:
                try:
                    order = ctx.orders.create_order(lines, note=note, source=platform)
                except ApiError as exc:
                    st.error(exc.message)
                else:
                    st.success(f"{SOURCE_LABELS[platform]} siparişi oluşturuldu: {order.order_id}")
    for order in ctx.orders.third_party_orders:
        st.write(f"{order.order_id} · {order.table.waiter_name} · {order.status.value} · {order.totals.total} ₺")

with menu_tab:
    with st.form("new_category", clear_on_submit=True):
        cols = st.columns([3, 1, 1])
        category_name = cols[0].text_input("Kategori adı")
        icon = cols[1].text_input("Simge", value="🍽️")
        sort_order = cols[2].number_input("Sıra", min_value=0, step=1)
        if st.form_submit_button("Kategori ekle") and category_name:
            try:
                menu.create_category(category_name, icon or None, int(sort_order))
            except (ApiError, ServiceUnavailableError) as exc:
                st.error(str(exc))

    if menu.categories:
        with st.form("new_product", clear_on_submit=True):
            category_ids = [category["id"] for category in menu.categories]
            names = {category["id"]: category["name"] for category in menu.categories}
            category_id = st.selectbox("Kategori", category_ids, format_func=names.get)
            product_name = st.text_input("Ürün adı")
            description = st.text_input("Açıklama")
            price = st.number_input("Fiyat (₺)", min_value=0.0, step=5.0, format="%.2f")
            if st.form_submit_button("Ürün ekle") and product_name:
                try:
                    menu.create_product(product_name, Decimal(f"{price:.2f}"), category_id, description or None)
                except (ApiError, ServiceUnavailableError) as exc:
                    st.error(str(exc))

    for category in sorted(menu.categories, key=lambda item: item["sort_order"]):
        with st.expander(f"{category['icon']} {category['name']}"):
            for product in menu.items_by_category(category["id"]):
                cols = st.columns([3, 1, 1])
                cols[0].write(f"{product['name']} · {product['price']} ₺")
                available = cols[1].toggle("Satışta", value=product["is_available"], key=f"avail_{product['id']}")
                if available != product["is_available"]:
                    try:
                        menu.set_product_available(product["id"], available)
                    except ApiError as exc:
                        st.error(exc.message)
                    st.rerun()
                if cols[2].button("Sil", key=f"del_product_{product['id']}"):
                    try:
                        menu.delete_product(product["id"])
                    except ApiError as exc:
                        st.error(exc.message)
                    st.rerun()
            if st.button("Kategoriyi sil (ürünleriyle)", key=f"del_category_{category['id']}"):
                try:
                    menu.delete_category(category["id"])
                except ApiError as exc:
                    st.error(exc.message)
                st.rerun()


with tables_tab:
    with st.form("new_table"):
        number = st.number_input("Masa no", min_value=1, step=1)
        if st.form_submit_button("Masa ekle"):
            try:
                ctx.admin.create_table(int(number))
            except (ApiError, ServiceUnavailableError) as exc:
                st.error(str(exc))
    for table in ctx.admin.load_tables():
        cols = st.columns([3, 1])
        cols[0].write(f"Masa {table['table_number']}" + ("" if table["is_active"] else " (pasif)"))
        if cols[1].button("Sil", key=f"del_{table['id']}"):
            try:
                ctx.admin.delete_table(table["id"])
            except ApiError as exc:
                st.error(exc.message)
            st.rerun()

with waiters_tab:
    with st.form("new_waiter"):
        full_name = st.text_input("Ad soyad")
        phone = st.text_input("Telefon")
        if st.form_submit_button("Garson ekle") and full_name:
            try:
                ctx.admin.create_waiter(full_name, phone or None)
            except (ApiError, ServiceUnavailableError) as exc:
                st.error(str(exc))
    st.dataframe(ctx.admin.load_waiters(), use_container_width=True)

with reports:
    period = st.selectbox("Dönem", ["daily", "weekly", "monthly", "custom"])
    start: date | None = None
    end: date | None = None
    if period == "custom":
        start = st.date_input("Başlangıç", value=date.today())
        end = st.date_input("Bitiş", value=date.today())
        params = {"startDate": start.isoformat(), "endDate": end.isoformat()}
    else:
        params = {"period": period}
    try:
        report = api_get(ctx, "/orders/report", params=params)
    except ServiceUnavailableError:
        st.warning("Çevrimdışı rapor (cihazdaki siparişler)")
        offline = ctx.orders.offline_report(None if period == "custom" else period, start_date=start, end_date=end)
        report = offline.model_dump(mode="json")
    except ApiError as exc:
        st.error(exc.message)
        st.stop()

    cols = st.columns(3)
    cols[0].metric("Ciro", f"{report['total_revenue']} ₺")
    cols[1].metric("Sipariş", report["total_orders"])
    cols[2].metric("Ortalama", f"{report['average_order']} ₺")
    st.dataframe(report["orders"], use_container_width=True)
    try:
        pdf = ctx.gateway.get("/orders/report.pdf", params=params)
    except (ApiError, ServiceUnavailableError):
        pdf = None
    if pdf:
        st.download_button("PDF indir", data=pdf, file_name=f"rapor-{now_string()}.pdf", mime="application/pdf")
