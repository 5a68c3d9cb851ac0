"""
Siraw Links - Theme Utilities
==============================
Dark profile theme and the view counter pulse.
"""

import streamlit as st


def apply_theme_css():
    """Apply the dark profile theme CSS."""
    st.markdown("""
    <style>
    .stApp {
        background: linear-gradient(135deg, #0a0a0a 0%, #1a1a1a 50%, #0a0a0a 100%);
        color: white;
    }

    /* Eye counter */
    .view-badge {
        display: inline-flex;
        align-items: center;
        gap: 0.5rem;
        background: rgba(38, 38, 38, 0.8);
        padding: 0.4rem 1rem 0.4rem 0.75rem;
        border-radius: 999px;
        border: 1px solid rgba(64, 64, 64, 0.5);
    }

    .view-count {
        font-weight: 600;
        font-size: 1.1rem;
        color: #d4d4d4;
        transition: transform 0.5s;
    }

    .view-count.pulse {
        animation: pulse 0.5s ease-in-out;
    }

    @keyframes pulse {
        50% { opacity: 0.5; transform: scale(1.1); }
    }

    /* Profile header */
    .profile-header {
        text-align: center;
        margin: 2rem 0;
    }

    .profile-avatar {
        width: 180px;
        height: 180px;
        border-radius: 50%;
        border: 4px solid #404040;
        object-fit: cover;
    }

    .profile-name {
        font-size: 3.5rem;
        font-weight: 800;
        background: linear-gradient(90deg, #aaa, #fff, #aaa);
        -webkit-background-clip: text;
        background-clip: text;
        color: transparent;
    }

    .profile-subtitle {
        color: #a3a3a3;
        font-size: 1.2rem;
    }

    .top-icons {
        display: flex;
        justify-content: center;
        gap: 1rem;
        margin-bottom: 2rem;
    }

    .top-icon {
        width: 3rem;
        height: 3rem;
        display: flex;
        align-items: center;
        justify-content: center;
        border-radius: 50%;
        background: rgba(38, 38, 38, 0.8);
        font-size: 1.4rem;
        text-decoration: none;
    }

    .call-to-action {
        text-align: center;
        font-size: 1.5rem;
        font-weight: bold;
        margin-bottom: 2rem;
    }

    /* Link cards */
    .link-cards {
        display: flex;
        flex-direction: column;
        gap: 1.5rem;
    }

    .link-card {
        display: flex;
        align-items: center;
        padding: 0.9rem;
        border-radius: 50px;
        background: rgba(38, 38, 38, 0.8);
        border: 2px solid rgba(64, 64, 64, 0.5);
        text-decoration: none;
        transition: all 0.3s ease;
    }

    .link-card:hover {
        transform: scale(1.01);
        border-color: rgba(115, 115, 115, 0.5);
    }

    .link-icon {
        width: 3.5rem;
        height: 3.5rem;
        display: flex;
        align-items: center;
        justify-content: center;
        border-radius: 12px;
        font-size: 1.5rem;
        margin-right: 1rem;
        flex-shrink: 0;
    }

    .link-icon img {
        width: 100%;
        height: 100%;
        border-radius: 12px;
    }

    .link-title {
        color: white;
        font-weight: 600;
    }

    .link-tagline {
        color: #a3a3a3;
        font-size: 0.9rem;
    }

    /* Responsive */
    @media (max-width: 768px) {
        .profile-name {
            font-size: 2.8rem;
        }
    }
    </style>
    """, unsafe_allow_html=True)
