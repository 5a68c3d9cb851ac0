"""
Siraw Links - Profile Component
================================
Profile header, top icon row and social link cards.
"""

import html

import streamlit as st

from core.profile import Profile, SocialLink


class ProfileComponent:
    """Renders the link-in-bio profile."""

    def __init__(self, profile: Profile):
        self.profile = profile

    def render(self):
        """Render header, icons, call to action and link cards."""
        p = self.profile
        st.markdown(
            f"""
            <div class="profile-header">
                <img class="profile-avatar" src="{html.escape(p.avatar_url)}" alt="{html.escape(p.name)}">
                <h1 class="profile-name">{html.escape(p.name)}</h1>
                <p class="profile-subtitle">{html.escape(p.subtitle)}</p>
            </div>
            """,
            unsafe_allow_html=True
        )

        icons = ''.join(
            f'<a class="top-icon" href="{html.escape(i.url)}" target="_blank" rel="noopener noreferrer" '
            f'style="color: {i.color}">{i.icon}</a>'
            for i in p.top_icons
        )
        st.markdown(f'<div class="top-icons">{icons}</div>', unsafe_allow_html=True)

        st.markdown(f'<div class="call-to-action">{html.escape(p.call_to_action)}</div>', unsafe_allow_html=True)

        cards = ''.join(self._link_card(link) for link in p.links)
        st.markdown(f'<div class="link-cards">{cards}</div>', unsafe_allow_html=True)

    def _link_card(self, link: SocialLink) -> str:
        if link.image_url:
            icon = f'<img src="{html.escape(link.image_url)}" alt="{html.escape(link.title)}">'
        else:
            icon = link.icon
        return (
            f'<a class="link-card" href="{html.escape(link.url)}" target="_blank" rel="noopener noreferrer">'
            f'<div class="link-icon" style="background: {link.color}; color: {link.icon_color}">{icon}</div>'
            f'<div class="link-text"><div class="link-title">{html.escape(link.title)}</div>'
            f'<div class="link-tagline">{html.escape(link.tagline)}</div></div>'
            f'</a>'
        )
