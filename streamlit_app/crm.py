"""Platform CRM: tenants and contracts, staff accounts and marketing e-mail."""

import streamlit as st

from siptakip.client.gateway import ApiError
from streamlit_app.common import api_get, require_role

CONTRACT_LABELS = {"lead": "Aday", "trial": "Deneme", "active": "Aktif", "expired": "Süresi dolmuş"}

st.set_page_config(page_title="Platform", layout="wide")
st.title("SipTakip Platform")
ctx = require_role("super_admin")

stats = api_get(ctx, "/crm/stats")
cols = st.columns(5)
for column, (label, key) in zip(cols, [("Toplam", "total"), ("Aktif", "active"), ("Deneme", "trial"), ("Aday", "leads"), ("Süresi dolan", "expired")]):
    column.metric(label, stats[key])
st.metric("Aylık gelir", f"{stats['monthly_revenue']} ₺")

st.subheader("Restoranlar")
with st.form("new_restaurant"):
    name = st.text_input("Ad")
    slug = st.text_input("Slug")
    if st.form_submit_button("Ekle") and name and slug:
        try:
            ctx.gateway.post("/crm/restaurants", {"name": name, "slug": slug})
        except ApiError as exc:
            st.error(exc.message)
restaurants = api_get(ctx, "/crm/restaurants")
st.dataframe(restaurants, use_container_width=True)

if restaurants:
    with st.form("contract_status"):
        by_id = {restaurant["id"]: restaurant for restaurant in restaurants}
        restaurant_id = st.selectbox("Restoran", list(by_id), format_func=lambda key: by_id[key]["name"])
        contract_status = st.selectbox("Sözleşme durumu", list(CONTRACT_LABELS), format_func=CONTRACT_LABELS.get)
        notes = st.text_input("Not")
        if st.form_submit_button("Güncelle"):
            changes = {"contractStatus": contract_status}
            if notes:
                changes["notes"] = notes
            try:
                ctx.gateway.put(f"/crm/restaurants/{restaurant_id}", changes)
            except ApiError as exc:
                st.error(exc.message)
            else:
                st.rerun()

st.subheader("Personel")
st.dataframe(api_get(ctx, "/crm/staff-users"), use_container_width=True)

st.subheader("E-posta kampanyası")
template = api_get(ctx, "/email/template")
subject = st.text_input("Konu", value=template["subject"])
recipients = st.text_area("Alıcılar (satır başına bir adres)")
html = st.text_area("HTML", value=template["html"], height=300)
if st.button("Gönder"):
    emails = [line.strip() for line in recipients.splitlines() if line.strip()]
    try:
        result = ctx.gateway.post("/email/send", {"emails": emails, "subject": subject, "customHtml": html})
    except ApiError as exc:
        st.error(exc.message)
    else:
        st.success(result["message"])
