"""Waiter screen: ready orders to serve or hand to couriers."""

import streamlit as st

from siptakip.client.gateway import ApiError
from siptakip.services.order_status import OrderSource, OrderStatus
from streamlit_app.common import auto_refresh, connection_badge, refresh_orders, require_role

st.set_page_config(page_title="Garson", layout="wide")
st.title("Garson")
ctx = require_role("waiter", "admin")
refresh_orders(ctx)
connection_badge(ctx)

for order in ctx.orders.ready_orders:
    restaurant_order = order.source == OrderSource.RESTAURANT
    target = OrderStatus.DELIVERED if restaurant_order else OrderStatus.COURIER_DELIVERED
    cols = st.columns([3, 2, 1])
    label = f"Masa {order.table.table_number}" if restaurant_order else order.table.waiter_name
    cols[0].write(f"**{order.order_id}** · {label}")
    cols[1].write(", ".join(f"{item.quantity}× {item.name}" for item in order.items))
    if cols[2].button(target.value, key=f"deliver_{order.order_id}"):
        try:
            ctx.orders.update_order_status(order.order_id, target)
        except ApiError as exc:
            st.error(exc.message)
        st.rerun()

st.subheader("Kuryeye teslim edilenler")
for order in ctx.orders.courier_orders:
    st.write(f"{order.order_id} · {order.table.waiter_name} · {order.totals.total} ₺")

auto_refresh()
