"""Kitchen board: orders in the kitchen, marked ready here."""

import streamlit as st

from siptakip.client.gateway import ApiError
from siptakip.services.order_status import OrderStatus
from streamlit_app.common import auto_refresh, connection_badge, refresh_orders, require_role

st.set_page_config(page_title="Mutfak", layout="wide")
st.title("Mutfak")
ctx = require_role("kitchen", "admin")
refresh_orders(ctx)
connection_badge(ctx)

orders = ctx.orders.kitchen_orders
if not orders:
    st.info("Bekleyen sipariş yok.")

for column, order in zip(st.columns(3) * (len(orders) // 3 + 1), orders):
    with column.container(border=True):
        label = f"Masa {order.table.table_number}" if order.table.table_number else order.table.waiter_name
        st.subheader(f"{order.order_id} · {label}")
        for item in order.items:
            st.write(f"{item.quantity} × {item.name}")
        if order.table.note:
            st.caption(order.table.note)
        if st.button("Hazır", key=f"ready_{order.order_id}"):
            try:
                ctx.orders.update_order_status(order.order_id, OrderStatus.READY)
            except ApiError as exc:
                st.error(exc.message)
            st.rerun()

auto_refresh()
