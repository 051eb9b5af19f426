# wheel_catalog/app.py
import streamlit as st

from utils.data_loader import load_data
from utils.columns import BRAND, DESCRIPTION, PART_NUMBER, PRICE, STOCK_IN_TRANSIT, STOCK_WAREHOUSE
from utils.product_fields import (
    all_image_urls, clean_value, first_image_url, format_price, has_stock, parse_price, parse_stock, product_details,
)
from services.facet_service import (
    ALL, MODE_STAGGERED, MODE_STANDARD, FilterState, apply_filters, is_any_filter_active, reset_filters,
    switch_mode,
)

st.set_page_config(
    page_title="B2B Wheel Catalog",
    page_icon="🛞",
    layout="wide"
)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x300.png?text=Image+unavailable"
CARDS_PER_ROW = 4

FACET_LABELS = {
    "Brand": "All brands",
    "Finish": "All finishes",
    "Size": "All sizes (R)",
    "PCD": "All PCDs",
    "Width": "All widths",
    "Offset": "All offsets",
    "Width_Front": "Front width",
    "Offset_Front": "Front offset",
    "Width_Rear": "Rear width",
    "Offset_Rear": "Rear offset",
}
MODE_LABELS = {MODE_STANDARD: "Standard", MODE_STAGGERED: "Front - Rear"}


def update_state(new_state):
    if new_state != st.session_state.filter_state:
        st.session_state.filter_state = new_state
        st.rerun()


def render_select(column, name, state, options):
    choices = [ALL] + options
    current = state.facets[name]
    index = choices.index(current) if current in choices else 0
    value = column.selectbox(
        FACET_LABELS[name], choices, index=index,
        format_func=lambda v: FACET_LABELS[name] if v == ALL else v,
        key=f"select_{name}_{current}",
    )
    if value != current:
        update_state(state.with_selection(name, value))


def render_card(column, product):
    name = clean_value(product.get(DESCRIPTION))
    warehouse = parse_stock(product.get(STOCK_WAREHOUSE))
    in_transit = parse_stock(product.get(STOCK_IN_TRANSIT))
    in_stock = has_stock(product)
    with column.container(border=True):
        st.image(first_image_url(product) or PLACEHOLDER_IMAGE, width="stretch")
        if in_stock:
            st.badge("In stock", color="green")
        else:
            st.badge("Out of stock", color="red")
        st.caption(clean_value(product.get(BRAND)))
        st.markdown(f"**{name}**")
        st.caption(f"Code: {clean_value(product.get(PART_NUMBER))}")
        if in_stock:
            st.markdown(f"Warehouse stock: :green[**{warehouse} pcs.**]")
        else:
            st.markdown(f"Warehouse stock: :red[**{warehouse} pcs.**]")
        if in_transit > 0:
            st.markdown(f"In transit: :blue[**{in_transit} pcs.**]")
        st.subheader(format_price(parse_price(product.get(PRICE))))
        st.caption("VAT included")
        with st.expander("Details"):
            images = all_image_urls(product)
            if len(images) > 1:
                st.image(images[1:], width=80)
            for key, value in product_details(product):
                st.markdown(f"**{key}:** {value}")


# --- HEADER AND REFRESH BUTTON ---
col1, col2 = st.columns([3, 1])
with col1:
    st.title("🛞 B2B Product Catalog")
    st.markdown("7001 Stock Wheels")
with col2:
    if st.button("🔄 Refresh Data"):
        st.cache_data.clear()
        st.rerun()

# --- LOAD DATA ---
with st.spinner("Loading catalog..."):
    df, last_updated, error = load_data()

if error:
    st.error(f"**An error occurred**\n\n{error}")
    st.stop()

if last_updated:
    st.caption(f"Data last updated: {last_updated.strftime('%Y-%m-%d %H:%M:%S')}")

if 'filter_state' not in st.session_state:
    st.session_state.filter_state = FilterState()

result = apply_filters(df, st.session_state.filter_state)
state = result.state
st.session_state.filter_state = state

# --- FILTERS ---
st.markdown("---")
search_col, brand_col, finish_col = st.columns([2, 1, 1])
search_term = search_col.text_input(
    "Search", value=state.search_term, placeholder="Search by name, code or EAN..."
)
if search_term != state.search_term:
    update_state(state.with_search(search_term))
render_select(brand_col, "Brand", state, result.options["Brand"])
render_select(finish_col, "Finish", state, result.options["Finish"])

mode = st.radio(
    "Filter mode", list(MODE_LABELS), index=list(MODE_LABELS).index(state.mode),
    format_func=MODE_LABELS.get, horizontal=True
)
if mode != state.mode:
    update_state(switch_mode(state, mode))

if state.mode == MODE_STANDARD:
    cols = st.columns(4)
    for col, name in zip(cols, ("Size", "Width", "PCD", "Offset")):
        render_select(col, name, state, result.options[name])
else:
    cols = st.columns(2)
    render_select(cols[0], "Size", state, result.options["Size"])
    render_select(cols[1], "PCD", state, result.options["PCD"])
    front, rear = st.columns(2)
    with front:
        st.markdown("**Front axle**")
        sub = st.columns(2)
        render_select(sub[0], "Width_Front", state, result.options["Width_Front"])
        render_select(sub[1], "Offset_Front", state, result.options["Offset_Front"])
    with rear:
        st.markdown("**Rear axle**")
        sub = st.columns(2)
        render_select(sub[0], "Width_Rear", state, result.options["Width_Rear"])
        render_select(sub[1], "Offset_Rear", state, result.options["Offset_Rear"])

if st.button("Reset all filters"):
    update_state(reset_filters(state.mode))

# --- PRODUCT GRID ---
st.markdown("---")
filtered = result.filtered
st.markdown(f"Showing **{len(filtered)}** of **{len(df)}** products.")

if filtered.empty:
    if is_any_filter_active(state):
        st.info("No products match the filters. Try changing the search terms or resetting the filters.")
    else:
        st.info("There are no products in the catalog right now. Please check back later.")
else:
    products = filtered.to_dict('records')
    for start in range(0, len(products), CARDS_PER_ROW):
        row = st.columns(CARDS_PER_ROW)
        for column, product in zip(row, products[start:start + CARDS_PER_ROW]):
            render_card(column, product)
