"""Material Design icons via QtAwesome."""
import qtawesome as qta
from cover_printer.gui.styles.theme import Colors


class MaterialIcons:
    """Centralized Material Design icon definitions using QtAwesome."""

    @staticmethod
    def image_open():
        """Open image into the selected placeholder."""
        return qta.icon('mdi6.image-plus', color=Colors.TEXT_SECONDARY)

    @staticmethod
    def file_pdf():
        """Export sheet as PDF."""
        return qta.icon('mdi6.file-pdf-box', color=Colors.TEXT_SECONDARY)

    @staticmethod
    def file_image():
        """Export sheet as raster image."""
        return qta.icon('mdi6.file-image-outline', color=Colors.TEXT_SECONDARY)

    @staticmethod
    def fit():
        """Reset an image to its initial fit."""
        return qta.icon('mdi6.fit-to-page-outline', color=Colors.TEXT_SECONDARY)

    @staticmethod
    def delete():
        """Clear/delete icon."""
        return qta.icon('mdi6.delete-outline', color=Colors.ERROR)

    @staticmethod
    def content_copy():
        """Copy icon."""
        return qta.icon('mdi6.content-copy', color=Colors.TEXT_SECONDARY)

    @staticmethod
    def debug():
        """Debug log toggle."""
        return qta.icon('mdi6.bug-outline', color=Colors.TEXT_SECONDARY)
