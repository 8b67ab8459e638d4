# -*- coding: utf-8 -*-
"""
Translation dictionaries for English and Spanish.

This module contains all translatable strings for the Service Tracker application.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Service Tracker",

        # Timestamp format used in tables and exports
        "format.timestamp": "%m/%d/%Y, %I:%M:%S %p",

        # Notifications
        "notify.started": "Service record started for {name}",
        "notify.ended": "Service record ended for {name}",
        "notify.exported": "Excel export completed",
        "notify.reloaded": "Records updated from another session",

        # Record table
        "records.title": "Service Records",
        "records.name": "Name",
        "records.range": "Range",
        "records.date": "Date",
        "records.start": "Start time",
        "records.end": "End time",
        "records.duration": "Duration",
        "records.action": "Action",
        "records.in_progress": "In progress",
        "records.not_available": "N/A",
        "records.finish": "Finish",
        "records.completed": "Completed",
        "records.empty": "No service records",

        # Weekly summary
        "summary.title": "Weekly Summary",
        "summary.name": "Name",
        "summary.hours": "Hours",
        "summary.status": "Status",
        "summary.goal_met": "Goal met",
        "summary.goal_pending": "Goal pending",
        "summary.empty": "No completed records in the last {days} days",

        # Export
        "export.sheet": "Service Records",
        "export.filename": "Service_Records_{date}.xlsx",

        # Errors
        "error.index_out_of_range": "There is no service record #{index}",
        "error.already_closed": "Service record #{index} is already finished",
        "error.invalid_interval": "The end time lies before the start time",
        "error.storage": "Could not read saved records: {detail}",
    },
    "es": {
        # Application
        "app.name": "Registro de Servicios",

        # Timestamp format used in tables and exports
        "format.timestamp": "%d/%m/%Y, %H:%M:%S",

        # Notifications
        "notify.started": "Registro de horas iniciado para {name}",
        "notify.ended": "Registro de horas finalizado para {name}",
        "notify.exported": "Exportación a Excel completada",
        "notify.reloaded": "Registros actualizados desde otra sesión",

        # Record table
        "records.title": "Registros de Horas",
        "records.name": "Nombre",
        "records.range": "Rango",
        "records.date": "Fecha",
        "records.start": "Hora de Inicio",
        "records.end": "Hora de Fin",
        "records.duration": "Duración",
        "records.action": "Acción",
        "records.in_progress": "En curso",
        "records.not_available": "N/A",
        "records.finish": "Finalizar",
        "records.completed": "Completado",
        "records.empty": "No hay registros de servicio",

        # Weekly summary
        "summary.title": "Resumen Semanal",
        "summary.name": "Nombre",
        "summary.hours": "Horas",
        "summary.status": "Estado",
        "summary.goal_met": "Meta Cumplida",
        "summary.goal_pending": "Meta Pendiente",
        "summary.empty": "No hay registros completados en los últimos {days} días",

        # Export
        "export.sheet": "Registros de Servicio",
        "export.filename": "Registros_Servicio_{date}.xlsx",

        # Errors
        "error.index_out_of_range": "No existe el registro de servicio #{index}",
        "error.already_closed": "El registro de servicio #{index} ya está finalizado",
        "error.invalid_interval": "La hora de fin es anterior a la hora de inicio",
        "error.storage": "No se pudieron leer los registros guardados: {detail}",
    },
}
