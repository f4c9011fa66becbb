"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Design Philosophy:
- Quiet, warm aesthetic with little visual noise
- Conversation and journal each get the full width of their tab
- Rounded panels, sand accents for the user and stone for Ananta
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

TabbedContent {
    height: 1fr;
}

TabPane {
    padding: 0;
}

/* ============================================
   Chat Tab
   ============================================ */
#chat-view {
    height: 100%;
}

#chat-status {
    height: 1;
    padding: 0 2;
    color: $text-muted;

    &.-waiting {
        color: $primary;
        text-style: italic;
    }

    &.-unavailable {
        color: $warning;
    }
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }

    &:focus-within {
        border: round $primary-lighten-1;
    }
}

/* Suggested prompts shown on a fresh conversation */
#suggestions {
    height: auto;
    padding: 0 1;

    & Button {
        width: 1fr;
        height: 3;
        margin: 0 1 0 0;
        background: $surface;
        color: $text-muted;
        border: tall $border;

        &:hover {
            color: $foreground;
            border: tall $primary 60%;
        }
    }
}

#disclaimer {
    height: 1;
    width: 100%;
    text-align: center;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $primary;
    background: $primary;
    color: $background;
    text-style: bold;

    &:hover {
        background: $primary-lighten-1;
        border: tall $primary-lighten-1;
    }

    &:disabled {
        background: $surface;
        border: tall $border;
        color: $text-disabled;
    }
}

/* ============================================
   Chat Messages - Conversation Display
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    border: none;
    background: transparent;
}

/* User messages - sand accent, right side of the conversation */
.user-message {
    border-right: tall $primary;
    background: $primary 10%;
    margin: 0 0 1 8;

    & .message-header {
        color: $primary;
        text-style: bold;
        text-align: right;
    }
}

/* Ananta messages - stone accent */
.model-message {
    border-left: tall $secondary;
    background: $secondary 6%;
    margin: 0 8 1 0;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }

    &.-streaming {
        border-left: tall $accent;
    }
}

.message-header {
    height: auto;
    padding: 0;
    margin-bottom: 0;
}

.message-content {
    height: auto;
    padding: 0;
    margin: 0;
    color: $foreground;
}

/* ============================================
   Journal Tab
   ============================================ */
#journal-view {
    height: 100%;
}

#journal-sidebar {
    width: 36;
    height: 100%;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;

    &:focus-within {
        border: round $secondary;
    }
}

#new-entry-btn {
    width: 100%;
    margin: 0 0 1 0;
}

#journal-list {
    height: 1fr;
    background: transparent;

    & > ListItem {
        padding: 0 1;
        height: auto;
    }

    & > ListItem.-active {
        background: $primary 15%;
    }
}

.entry-title {
    text-style: bold;
}

.entry-date {
    color: $text-muted;
}

#journal-empty {
    padding: 1 2;
    color: $text-muted;
    text-style: italic;
}

#journal-editor {
    width: 1fr;
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;

    &:focus-within {
        border: round $primary;
    }
}

#journal-text {
    height: 1fr;
    border: none;
    background: transparent;
}

#journal-actions {
    height: 3;
    align: right middle;

    & Button {
        margin: 0 0 0 1;
    }
}

#journal-saved {
    width: 1fr;
    height: 3;
    content-align: left middle;
    color: $success;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
    scrollbar-gutter: stable;

    &:focus {
        border: round $warning;
    }
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-information {
        border: tall $primary;
        background: $primary 12%;
        color: $foreground;
    }

    &.-error {
        border: tall $error;
        background: $error 12%;
        color: $foreground;
    }

    &.-warning {
        border: tall $warning;
        background: $warning 12%;
        color: $foreground;
    }
}

* {
    scrollbar-background: $panel;
    scrollbar-color: $surface-lighten-1;
    scrollbar-color-hover: $primary 50%;
    scrollbar-color-active: $primary;
    scrollbar-size: 1 1;
}

/* ============================================
   Header and Footer
   ============================================ */
Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}

Footer {
    background: $panel;
    height: auto;
}

FooterKey {
    background: $surface;
    color: $foreground;
    padding: 0 1;

    & > .footer-key--key {
        background: $primary 80%;
        color: $background;
        text-style: bold;
    }
}

/* ============================================
   Global Button Variants
   ============================================ */
Button {
    min-width: 8;
    height: 3;
    border: tall $border;
    background: $surface;
    color: $foreground;

    &:hover {
        text-style: bold;
        background: $surface-lighten-1;
    }

    &:focus {
        border: tall $primary;
    }
}

Button.-primary {
    background: $primary;
    color: $background;
    border: tall $primary;

    &:hover {
        background: $primary-lighten-1;
        border: tall $primary-lighten-1;
    }
}

Button.-error {
    background: $error;
    color: $background;
    border: tall $error;

    &:hover {
        background: $error-lighten-1;
        border: tall $error-lighten-1;
    }
}

/* ============================================
   Markdown Content Styling
   ============================================ */
Markdown {
    margin: 0;
    padding: 0;
}

MarkdownBlockQuote {
    border-left: wide $primary;
    background: $primary 8%;
    padding: 0 1;
    margin: 1 0;
}
"""
