# foodprint/ui.py — Streamlit front end: `streamlit run foodprint/ui.py`

import streamlit as st
from pydantic import ValidationError

from foodprint.calculator import (
    LABEL_COLORS,
    accept_result,
    meter_value,
    percent_value,
)
from foodprint.client import ImageError, ProxyClient, ProxyError, decode_data_url, encode_image
from foodprint.config import get_settings
from foodprint.content import (
    BOTTOM_LINE,
    CLOSING,
    DIET_BREAKDOWN,
    IMPACT_DATA,
    KEY_FACTS,
    QUICK_EXAMPLES,
    TABS,
    WHY_SECTIONS,
)
from foodprint.flow import FlowError, ScanSession, Stage
from foodprint.schemas import AnalysisType, FoodResult, WasteResult


def get_session() -> ScanSession:
    if "scan" not in st.session_state:
        st.session_state["scan"] = ScanSession()
        st.session_state["scan_id"] = 0
    return st.session_state["scan"]


def get_client() -> ProxyClient:
    if "proxy" not in st.session_state:
        settings = get_settings()
        st.session_state["proxy"] = ProxyClient(settings.proxy_url, timeout=settings.timeout)
    return st.session_state["proxy"]


def new_scan() -> None:
    get_session().reset()
    # fresh widget keys drop the old uploads
    st.session_state["scan_id"] += 1


# ---- Pieces -----------------------------------------------------------------
def carbon_meter(label: str, kg_co2: float) -> None:
    color = LABEL_COLORS.get(label, "red")
    left, right = st.columns([3, 2])
    left.caption("Carbon Impact")
    left.markdown(f"### :{color}[{kg_co2:.2f} kg CO₂]")
    right.markdown(f":{color}-background[{label} Impact]")
    st.progress(meter_value(label))
    st.caption("Low · Medium · High")


def resource_row(water: float, land: float, energy: float) -> None:
    c1, c2, c3 = st.columns(3)
    c1.metric("💧 Water", f"{water:,.0f} L")
    c2.metric("🌱 Land", f"{land:,.1f} m²")
    c3.metric("⚡ Energy", f"{energy:,.1f} kWh")


def food_card(raw: dict) -> None:
    try:
        food = FoodResult.model_validate(raw)
    except ValidationError:
        st.error("The analysis came back in an unexpected shape.")
        st.json(raw)
        return

    with st.container(border=True):
        head, conf = st.columns([4, 1])
        head.subheader(f"🍽️ {food.name}")
        if food.ingredients:
            head.caption(" · ".join(food.ingredients))
        conf.metric("Confidence", f"{food.confidence:.0f}%")

        carbon_meter(food.label, food.kgCO2)
        st.info(f"🚗 Equivalent to **{food.comparison}**" if food.comparison else "🚗 No comparison available")

        usage = food.resourceUsage
        resource_row(usage.waterLiters, usage.landM2, usage.energyKwh)

        if food.nutrition:
            n = food.nutrition
            st.markdown("**Nutrition**" + (f" · {n.healthLabel}" if n.healthLabel else ""))
            c1, c2, c3, c4, c5 = st.columns(5)
            c1.metric("kcal", f"{n.calories:.0f}")
            c2.metric("Protein", f"{n.proteinG:.0f} g")
            c3.metric("Carbs", f"{n.carbsG:.0f} g")
            c4.metric("Fat", f"{n.fatG:.0f} g")
            c5.metric("Fiber", f"{n.fiberG:.0f} g")

        if food.qualityScore is not None:
            st.markdown(f"**Quality score:** {food.qualityScore:.0f}/100")
            st.progress(percent_value(food.qualityScore))

        if food.potentialWaste:
            pw = food.potentialWaste
            st.warning(
                f"🗑️ If wasted: {pw.kgCO2:.2f} kg CO₂ and {pw.waterLiters:,.0f} L of water"
                + (f". {pw.message}" if pw.message else "")
            )

        if food.tip:
            st.success(f"🌿 {food.tip}")


def waste_card(raw: dict) -> None:
    try:
        waste = WasteResult.model_validate(raw)
    except ValidationError:
        st.error("The waste analysis came back in an unexpected shape.")
        st.json(raw)
        return

    with st.container(border=True):
        head, conf = st.columns([4, 1])
        head.subheader("🗑️ Food Waste")
        head.caption(" · ".join(waste.wastedItems) if waste.wastedItems else "Clean plate, nothing wasted!")
        conf.metric("Confidence", f"{waste.confidence:.0f}%")

        st.markdown(f"**{waste.wastePercentage:.0f}% wasted** (~{waste.wasteGrams:.0f} g)")
        st.progress(percent_value(waste.wastePercentage))
        st.markdown(f"### :red[{waste.kgCO2Lost:.2f} kg CO₂ lost]")
        if waste.comparison:
            st.info(f"🚗 Equivalent to **{waste.comparison}**")

        lost = waste.resourcesLost
        resource_row(lost.waterLiters, lost.landM2, lost.energyKwh)

        if waste.tip:
            st.success(f"🌿 {waste.tip}")


def run_analysis(scan: ScanSession, analysis_type: AnalysisType) -> None:
    client = get_client()
    try:
        scan.begin_request()
    except FlowError as e:
        st.warning(str(e))
        return

    try:
        with st.spinner("Analyzing with AI..."):
            result = client.analyze(scan.image, analysis_type, meal_context=scan.food)
    except ProxyError as e:
        st.toast(f"Analysis failed: {e.message}", icon="❌")
        return
    finally:
        scan.end_request()

    if not accept_result(result, analysis_type):
        st.toast("Could not identify the image with high confidence. Please try a clearer image.", icon="⚠️")
        return

    if analysis_type is AnalysisType.FOOD:
        scan.record_food(result)
        st.toast(f"Detected: {result.get('name')} with {result.get('confidence')}% confidence", icon="✅")
    else:
        scan.record_waste(result)
        st.toast("Waste analyzed successfully!", icon="✅")
    st.rerun()


def pick_image(widget_key: str) -> None:
    scan = get_session()
    picked = st.session_state.get(widget_key)
    if picked is None:
        # widget cleared: drop the preview too
        scan.clear_image()
        return
    try:
        scan.set_image(encode_image(picked.getvalue(), getattr(picked, "name", None)))
    except (ImageError, FlowError) as e:
        st.toast(str(e), icon="❌")


def image_picker(scan: ScanSession, label: str) -> None:
    key = f"{st.session_state['scan_id']}_{scan.stage.value}"
    if st.toggle("📷 Take Photo", key=f"use_camera_{key}"):
        widget_key = f"camera_{key}"
        st.camera_input(label, key=widget_key, on_change=pick_image, args=(widget_key,))
    else:
        widget_key = f"upload_{key}"
        st.file_uploader(f"⬆️ {label}", type=["jpg", "jpeg", "png", "webp"], key=widget_key,
                         on_change=pick_image, args=(widget_key,))


# ---- Tabs -------------------------------------------------------------------
def scan_tab() -> None:
    scan = get_session()

    with st.container(border=True):
        st.subheader("Scan Your Food")
        st.caption("Upload a photo or take a picture of your meal")

        if scan.stage is Stage.INITIAL:
            image_picker(scan, "Meal photo")
            if scan.image:
                st.image(decode_data_url(scan.image), caption="Food preview", use_container_width=True)
                if st.button("✨ Analyze Carbon Impact", type="primary", use_container_width=True,
                             disabled=scan.busy):
                    run_analysis(scan, AnalysisType.FOOD)
        elif scan.meal_image:
            st.image(decode_data_url(scan.meal_image), caption="Your meal", use_container_width=True)

    if scan.food:
        food_card(scan.food)

        if scan.stage is Stage.FOOD_ANALYZED:
            with st.container(border=True):
                st.subheader("Finished eating?")
                st.caption("Snap your plate to see how much was wasted")
                image_picker(scan, "Leftovers photo")
                if scan.image:
                    st.image(decode_data_url(scan.image), caption="Leftovers preview", use_container_width=True)
                    if st.button("🗑️ Analyze Food Waste", type="primary", use_container_width=True,
                                 disabled=scan.busy):
                        run_analysis(scan, AnalysisType.WASTE)

    if scan.waste:
        waste_card(scan.waste)

    if scan.stage is not Stage.INITIAL:
        st.button("Scan Another Meal", on_click=new_scan, use_container_width=True)
    elif not scan.image:
        with st.container(border=True):
            st.markdown("**Common Food Carbon Footprints**")
            for item in QUICK_EXAMPLES:
                color = LABEL_COLORS[item["level"]]
                st.markdown(f"{item['icon']} {item['name']} · :{color}[{item['kg_co2']} kg CO₂]")


def global_tab() -> None:
    with st.container(border=True):
        st.subheader("👥 The 75-Year Forecast")
        st.caption("What happens when the world shifts to a diversified diet model?")

    with st.container(border=True):
        st.markdown("#### The 5–60–15–20 Model")
        st.caption("A realistic, achievable global diet distribution")
        for row in DIET_BREAKDOWN:
            st.markdown(f"**{row['label']}** · {row['percentage']}%")
            st.progress(row["percentage"])

    st.markdown("#### Projected Impacts")
    for item in IMPACT_DATA:
        with st.container(border=True):
            st.markdown(f"{item['icon']} **{item['title']}**")
            now, arrow, later = st.columns([5, 1, 5])
            now.caption(item["current"]["label"])
            now.markdown(f":red[**{item['current']['value']}**]")
            arrow.markdown("→")
            later.caption(item["improved"]["label"])
            later.markdown(f":green[**{item['improved']['value']}**]")
            st.caption(f"↓ {item['reduction']}")

    with st.container(border=True):
        st.markdown("#### The Bottom Line")
        st.markdown(BOTTOM_LINE)


def why_tab() -> None:
    with st.container(border=True):
        st.subheader("✨ Why This Actually Works")
        st.caption("The science, logic, and behavioral psychology behind food-based climate action")

    cols = st.columns(2)
    for i, fact in enumerate(KEY_FACTS):
        cols[i % 2].metric(fact["label"], fact["stat"])

    for section in WHY_SECTIONS:
        with st.container(border=True):
            st.markdown(f"{section['icon']} **{section['title']}**")
            for point in section["points"]:
                st.markdown(f"✅ {point}")
            st.caption(f"✨ {section['highlight']}")

    with st.container(border=True):
        st.markdown("#### You're Part of the Solution")
        st.markdown(CLOSING)
        st.caption("Informed · Empowered · Impactful")


def main() -> None:
    st.set_page_config(page_title="Foodprint", page_icon="🌿", layout="centered")
    st.title("🌿 Foodprint")
    st.caption("See the carbon footprint of what's on your plate")

    health = get_client().health()
    if health is None:
        st.warning("Analysis service not reachable. Start it with `uvicorn foodprint.main:app`.")
    elif not health.get("ok"):
        st.warning(f"Analysis service is misconfigured: {health.get('error', 'unknown error')}")

    renderers = {"scan": scan_tab, "global": global_tab, "why": why_tab}
    for (tab_id, _), tab in zip(TABS, st.tabs([label for _, label in TABS])):
        with tab:
            renderers[tab_id]()


if __name__ == "__main__":
    main()
