import base64
import os
import time

import httpx
import pandas as pd
import streamlit as st

# Use env var in docker; defaults to docker service name
API_URL = os.getenv("API_URL", "http://api:8000")
# If running UI locally (outside docker), set:
#API_URL = "http://127.0.0.1:8000"

PHONE = "(416) 555-1234"
EMAIL = "info@premiumlandscaping.ca"
CALL_US = f"Please try again or call us directly at {PHONE} or email {EMAIL}."

# shown when the API has no service rows yet
FALLBACK_SERVICES = [
    {"key": "interlocking", "title_en": "Interlocking", "title_zh": "铺砖", "description_en": "Professional interlocking paver installation."},
    {"key": "powerwashing", "title_en": "Powerwashing", "title_zh": "高压清洗", "description_en": "Remove weeds, dirt, and stains from outdoor surfaces."},
    {"key": "relevelling", "title_en": "Relevelling", "title_zh": "车道修复", "description_en": "Repair and relevel sunken or damaged driveways."},
    {"key": "polymersand", "title_en": "Polymer Sand", "title_zh": "胶沙更换", "description_en": "Polymeric sand joints that keep weeds out."},
    {"key": "sealing", "title_en": "Paver Sealing", "title_zh": "铺路石密封", "description_en": "Protect pavers from fading and stains."},
    {"key": "yardworks", "title_en": "Yard Works", "title_zh": "庭院工作", "description_en": "Landscape design, planting, and hardscaping."},
]

IMAGE_CATEGORIES = [
    "interlocking", "powerwashing", "relevelling", "polymer_sand",
    "paver_sealing", "yard_works", "about", "hero", "other",
]

st.set_page_config(page_title="Premium Landscaping Services", layout="wide")


# ---- helpers ----
def auth_headers() -> dict:
    token = st.session_state.get("token")
    return {"Authorization": f"Bearer {token}"} if token else {}


def safe_get_json(url: str, **kwargs):
    try:
        r = httpx.get(url, timeout=30, **kwargs)
        r.raise_for_status()
        return r.json()
    except Exception as e:
        st.error(f"API error calling {url}: {e}")
        return None


def load_services() -> list[dict]:
    try:
        r = httpx.get(f"{API_URL}/gallery/services", timeout=10)
        r.raise_for_status()
        rows = r.json()
    except httpx.HTTPError:
        rows = []
    return rows or FALLBACK_SERVICES


home_tab, chat_tab, quote_tab, admin_tab = st.tabs(["Home", "Chat", "Get a Quote", "Admin"])

with home_tab:
    st.title("Premium Landscaping Services")
    st.subheader("Interlocking, power washing, and yard works across Toronto & the GTA")
    st.write("Over 15 years of professional landscaping. Free estimates on every project.")

    st.divider()
    st.markdown("### Our Services")
    services = load_services()
    cols = st.columns(3)
    for i, svc in enumerate(services):
        with cols[i % 3]:
            st.markdown(f"**{svc['title_en']} ({svc['title_zh']})**")
            st.caption(svc.get("description_en") or "")

    try:
        r = httpx.get(f"{API_URL}/gallery/images", timeout=10)
        r.raise_for_status()
        images = r.json()
    except httpx.HTTPError:
        images = []
    if images:
        st.markdown("### Recent Work")
        gcols = st.columns(4)
        for i, img in enumerate(images[:8]):
            with gcols[i % 4]:
                url = img["url"]
                if url.startswith("/"):
                    url = f"{API_URL}{url}"
                st.image(url, caption=img["title"], use_container_width=True)

    st.divider()
    st.markdown("### About Us")
    st.write(
        "We are a certified team serving the greater Toronto area, committed to quality "
        "workmanship, premium materials, and customer satisfaction."
    )
    st.markdown(f"📞 {PHONE}  |  📧 {EMAIL}  |  📍 Toronto, GTA")

with chat_tab:
    st.subheader("Chat with us")

    # welcome message once per browser session
    if "chat_messages" not in st.session_state:
        welcome = safe_get_json(f"{API_URL}/chat/welcome")
        st.session_state["chat_messages"] = [
            {"role": "assistant", "content": welcome["answer"] if welcome else "Welcome! How can we help?"}
        ]
        st.session_state["chat_session_id"] = None

    for m in st.session_state["chat_messages"]:
        with st.chat_message(m["role"]):
            st.markdown(m["content"])

    prompt = st.chat_input("Ask about our services or request a quote...")
    if prompt:
        st.session_state["chat_messages"].append({"role": "user", "content": prompt})
        with st.spinner("Typing..."):
            time.sleep(0.8)
            try:
                payload = {"message": prompt, "session_id": st.session_state["chat_session_id"]}
                r = httpx.post(f"{API_URL}/chat", json=payload, timeout=30)
                r.raise_for_status()
                data = r.json()
                st.session_state["chat_session_id"] = data["session_id"]
                answer = data["answer"]
            except Exception:
                answer = f"Sorry, something went wrong. {CALL_US}"
        st.session_state["chat_messages"].append({"role": "assistant", "content": answer})
        st.rerun()

with quote_tab:
    st.subheader("Get Your Free Quote")
    with st.form("quote_form", clear_on_submit=True):
        name = st.text_input("Name")
        phone = st.text_input("Phone")
        email = st.text_input("Email")
        service_keys = [s["key"] for s in FALLBACK_SERVICES]
        service = st.selectbox(
            "Service",
            service_keys,
            format_func=lambda k: next(f"{s['title_en']} ({s['title_zh']})" for s in FALLBACK_SERVICES if s["key"] == k),
        )
        message = st.text_area("Project details")
        submitted = st.form_submit_button("Send request")

    if submitted:
        missing = [label for label, v in [("name", name), ("phone number", phone), ("email", email), ("project details", message)] if not v.strip()]
        if missing:
            st.error(f"Please enter your {missing[0]}")
        else:
            try:
                r = httpx.post(
                    f"{API_URL}/quotes",
                    json={"name": name, "phone": phone, "email": email, "service": service, "message": message},
                    timeout=30,
                )
                data = r.json()
                if r.status_code == 422:
                    st.error("Please check your details (is the email address valid?)")
                elif data.get("success"):
                    st.success(data["message"])
                else:
                    st.error(data.get("message") or f"Failed to send quote request. {CALL_US}")
            except Exception:
                st.error(f"Failed to send quote request. {CALL_US}")

with admin_tab:
    st.subheader("Admin Dashboard")

    if not st.session_state.get("token"):
        with st.form("login"):
            admin_email = st.text_input("Email")
            admin_password = st.text_input("Password", type="password")
            if st.form_submit_button("Log in"):
                try:
                    r = httpx.post(f"{API_URL}/auth/login", json={"email": admin_email, "password": admin_password}, timeout=30)
                    r.raise_for_status()
                    st.session_state["token"] = r.json()["access_token"]
                    st.rerun()
                except Exception as e:
                    st.error(f"Login failed: {e}")
        st.stop()

    if st.button("Log out"):
        st.session_state.pop("token", None)
        st.rerun()

    # ---- images ----
    st.markdown("### Images")
    all_images = safe_get_json(f"{API_URL}/admin/images", headers=auth_headers())
    if all_images is None:
        st.stop()

    df_images = pd.DataFrame(all_images)
    if df_images.empty:
        st.info("No images yet.")
    else:
        category_filter = st.selectbox("Category", ["(all)"] + IMAGE_CATEGORIES, index=0)
        filtered = df_images if category_filter == "(all)" else df_images[df_images["category"] == category_filter]
        preferred_cols = [c for c in ["id", "title", "category", "source", "display_order", "url"] if c in filtered.columns]
        st.dataframe(filtered[preferred_cols], use_container_width=True, hide_index=True)

        d1, d2 = st.columns([2, 2])
        with d1:
            delete_id = st.number_input("Image ID to delete", min_value=1, value=int(df_images["id"].iloc[0]))
        with d2:
            if st.button("Delete image"):
                try:
                    r = httpx.delete(f"{API_URL}/admin/images/{int(delete_id)}", headers=auth_headers(), timeout=30)
                    r.raise_for_status()
                    st.success("Image deleted")
                    st.rerun()
                except Exception as e:
                    st.error(f"Delete failed: {e}")

    st.divider()
    up_col, gd_col = st.columns(2)
    with up_col:
        st.markdown("#### Upload image")
        with st.form("upload_image", clear_on_submit=True):
            up_title = st.text_input("Title")
            up_desc = st.text_input("Description")
            up_cat = st.selectbox("Category", IMAGE_CATEGORIES)
            up_file = st.file_uploader("Image", type=["png", "jpg", "jpeg", "webp"])
            if st.form_submit_button("Upload") and up_file is not None:
                payload = {
                    "title": up_title or up_file.name,
                    "description": up_desc or None,
                    "category": up_cat,
                    "base64_data": base64.b64encode(up_file.getvalue()).decode("ascii"),
                    "file_name": up_file.name,
                    "mime_type": up_file.type or "application/octet-stream",
                }
                try:
                    r = httpx.post(f"{API_URL}/admin/images/upload", json=payload, headers=auth_headers(), timeout=60)
                    r.raise_for_status()
                    st.success("Image uploaded successfully")
                except Exception as e:
                    st.error(f"Upload failed: {e}")

    with gd_col:
        st.markdown("#### Add Google Drive image")
        with st.form("google_drive", clear_on_submit=True):
            gd_title = st.text_input("Title")
            gd_cat = st.selectbox("Category", IMAGE_CATEGORIES, key="gd_cat")
            gd_file_id = st.text_input("Google Drive file ID")
            gd_url = st.text_input("Share URL")
            if st.form_submit_button("Add"):
                payload = {
                    "title": gd_title,
                    "category": gd_cat,
                    "google_drive_file_id": gd_file_id,
                    "google_drive_url": gd_url,
                }
                try:
                    r = httpx.post(f"{API_URL}/admin/images/google-drive", json=payload, headers=auth_headers(), timeout=30)
                    r.raise_for_status()
                    st.success("Google Drive image added successfully")
                except Exception as e:
                    st.error(f"Add failed: {e}")

    # ---- services ----
    st.divider()
    st.markdown("### Services")
    svc_rows = safe_get_json(f"{API_URL}/admin/services", headers=auth_headers())
    if svc_rows is not None:
        if not svc_rows:
            st.info("No services in the database yet.")
            if st.button("Seed the six default services"):
                r = httpx.post(f"{API_URL}/admin/services/seed", headers=auth_headers(), timeout=30)
                st.json(r.json())
                st.rerun()
        else:
            st.dataframe(pd.DataFrame(svc_rows), use_container_width=True, hide_index=True)

    # ---- saved quotes ----
    st.divider()
    st.markdown("### Saved Quote Requests")
    quotes = safe_get_json(f"{API_URL}/admin/quotes", headers=auth_headers())
    if quotes is not None:
        df_quotes = pd.DataFrame(quotes)
        if df_quotes.empty:
            st.info("No quote requests yet.")
        else:
            st.caption(f"Rows: {len(df_quotes)}  |  Pending: {int((df_quotes['status'] == 'pending').sum())}")
            st.dataframe(df_quotes, use_container_width=True, hide_index=True)

        q1, q2 = st.columns(2)
        with q1:
            if st.button("Retry pending quotes"):
                r = httpx.post(f"{API_URL}/admin/quotes/sync", headers=auth_headers(), timeout=30)
                st.json(r.json())
        with q2:
            if st.button("Clear saved quotes"):
                r = httpx.delete(f"{API_URL}/admin/quotes", headers=auth_headers(), timeout=30)
                st.json(r.json())
                st.rerun()
