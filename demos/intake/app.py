"""
Streamlit Demo Interface: Label Code Intake Form.

Features:
1. Enter requester details (employee ID, name, email)
2. Upload label photos in batches; codes are recognized and deduplicated
3. Review the list, delete wrong entries
4. Send the reissue request email with photos and a QR code of all codes
"""

import asyncio
import logging

import streamlit as st

from src.common.errors import IntakeError, MailDispatchError
from src.common.types import ImageRef
from src.dispatch import SMTPMailer
from src.intake import BatchIntakeCoordinator, IntakeList, ProgressEvent
from src.ocr import create_engine, get_default_config
from src.submission import SubmissionService, validate_requester

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# STREAMLIT PAGE CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Label Code Intake",
    page_icon="🏷️",
    layout="centered",
)

# ═══════════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════


@st.cache_resource
def load_coordinator() -> BatchIntakeCoordinator:
    """Load OCR engine and intake coordinator with caching."""
    logger.info("Loading intake coordinator...")
    return BatchIntakeCoordinator(ocr_engine=create_engine(get_default_config()))


@st.cache_resource
def load_submission_service() -> SubmissionService:
    """Load submission service with caching."""
    return SubmissionService(mailer=SMTPMailer())


def get_intake_list() -> IntakeList:
    """Session-scoped intake list."""
    if "intake_list" not in st.session_state:
        st.session_state.intake_list = IntakeList(max_items=load_coordinator().max_items)
    return st.session_state.intake_list


def run_batch(uploaded_files) -> None:
    """Run uploaded files through the coordinator and report the outcome."""
    coordinator = load_coordinator()
    intake_list = get_intake_list()
    images = [
        ImageRef(
            data=f.getvalue(),
            filename=f.name,
            content_type=f.type or "image/jpeg",
        )
        for f in uploaded_files
    ]

    status = st.empty()

    def on_progress(event: ProgressEvent) -> None:
        status.info(f"⏳ {event.describe()}")

    outcome = asyncio.run(
        coordinator.process_and_merge(images, intake_list, on_progress=on_progress)
    )
    status.empty()

    if outcome.accepted:
        st.success(f"✅ {outcome.summary()}")
    if outcome.rejected_duplicates:
        st.warning(
            "Already in the list, skipped:\n\n"
            + "\n".join(f"- `{code}`" for code in outcome.rejected_duplicates)
        )
    for error in outcome.processing_errors:
        st.warning(f"⚠️ {error.message}")
    if outcome.truncated:
        st.error(
            f"The list holds at most {intake_list.max_items} images. "
            f"{len(outcome.not_attempted)} images were not added."
        )


# ═══════════════════════════════════════════════════════════════════════════
# REQUESTER FORM
# ═══════════════════════════════════════════════════════════════════════════

st.title("🏷️ Label Code Reissue Request")

col1, col2 = st.columns(2)
with col1:
    employee_id = st.text_input("Employee ID")
with col2:
    name = st.text_input("Name")
email = st.text_input("Email")

# ═══════════════════════════════════════════════════════════════════════════
# IMAGE INTAKE
# ═══════════════════════════════════════════════════════════════════════════

intake_list = get_intake_list()
st.subheader(f"Label images ({len(intake_list)}/{intake_list.max_items})")

with st.form("upload", clear_on_submit=True):
    uploaded_files = st.file_uploader(
        "Add label photos",
        type=["jpg", "jpeg", "png", "webp", "bmp"],
        accept_multiple_files=True,
        disabled=intake_list.is_full,
    )
    submitted = st.form_submit_button("Recognize codes", disabled=intake_list.is_full)

if submitted and uploaded_files:
    with st.spinner("Recognizing label codes..."):
        run_batch(uploaded_files)

for index, item in enumerate(intake_list.snapshot()):
    col_img, col_code, col_del = st.columns([1, 3, 1])
    with col_img:
        st.image(item.image_ref.data, use_container_width=True)
    with col_code:
        st.markdown(f"**{index + 1}.** `{item.code}`" if item.code else f"**{index + 1}.** Not recognized")
    with col_del:
        if st.button("🗑️", key=f"delete-{index}"):
            intake_list.remove_at(index)
            st.rerun()

# ═══════════════════════════════════════════════════════════════════════════
# SUBMISSION
# ═══════════════════════════════════════════════════════════════════════════

st.divider()

if st.button("📧 Send request", type="primary", use_container_width=True):
    try:
        requester = validate_requester(employee_id, name, email)
        with st.spinner("Sending email..."):
            result = asyncio.run(
                load_submission_service().submit(requester, intake_list.snapshot())
            )
    except MailDispatchError as e:
        st.error(f"❌ {e}")
        if e.help_text:
            st.code(e.help_text)
    except IntakeError as e:
        st.error(f"❌ {e}")
    else:
        st.success(f"✅ Request sent to {result.recipient}")
        intake_list.clear()
