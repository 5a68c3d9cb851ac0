"""
Siraw Links - Profile Data
===========================
Static content of the link-in-bio page.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SocialLink:
    title: str
    tagline: str
    url: str
    icon: str
    color: str
    icon_color: str = '#ffffff'
    image_url: Optional[str] = None


@dataclass(frozen=True)
class TopIcon:
    url: str
    icon: str
    color: str


@dataclass(frozen=True)
class Profile:
    name: str
    subtitle: str
    avatar_url: str
    call_to_action: str
    top_icons: Tuple[TopIcon, ...]
    links: Tuple[SocialLink, ...]


SIRAW_PROFILE = Profile(
    name='siraw',
    subtitle='siraw a.k.a waris',
    avatar_url='https://placehold.co/180x180/444444/FFFFFF?text=Siraw+PFP',
    call_to_action='DM AND GET AN EDIT BELOW!',
    top_icons=(
        TopIcon('https://www.tiktok.com/@siraw._?_r=1&_t=ZT-91Wa264mQCz', '🎵', '#ffffff'),
        TopIcon('https://youtube.com/@siraw_edit?si=07fUM1T9E32G36PY', '▶️', '#dc2626'),
        TopIcon('https://snapchat.com/t/SGPDe1Rk', '👻', '#fde047'),
    ),
    links=(
        SocialLink('YouTube', 'Support my Channel',
                   'https://youtube.com/@siraw_edit?si=07fUM1T9E32G36PY', '▶️', '#dc2626'),
        SocialLink('Discord', 'DM for paid edits',
                   'https://discord.gg/hQegert8', '💬', '#5865F2'),
        SocialLink('Snapchat', 'DM for paid edits',
                   'https://snapchat.com/t/Obou4lAc', '👻', '#fde047', icon_color='#000000'),
        SocialLink('Instagram', 'Stay updated',
                   'https://www.instagram.com/siraw._?igsh=cXo3ZTQ4dno1YW1i&utm_source=qr', '📸',
                   'linear-gradient(135deg, #833AB4, #C13584, #FD1D1D)'),
        SocialLink("NODNARB'S WHATSAPP GC", 'WhatsApp Community • Free to join',
                   'https://chat.whatsapp.com/HfIjTFyCLBbHVwRJhGw7Kc', '🟢', '#25D366',
                   image_url='https://placehold.co/50x50/25D366/FFFFFF?text=WA'),
    ),
)
